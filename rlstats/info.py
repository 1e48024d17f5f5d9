__title__ = "rlstats"
__version__ = "0.1.0"
