import asyncio
import os

from dotenv import load_dotenv
load_dotenv(".env")

from rlstats import RlStats, __version__
from rlstats.logger import enable_console_logging, logger


async def main():
    enable_console_logging(os.getenv("RLSTATS_LOG_LEVEL", "INFO").upper())
    api_key = os.getenv("RLSTATS_API_KEY")
    if not api_key:
        raise RuntimeError("RLSTATS_API_KEY not found in environment variables. Please set it in your .env file.")

    async with RlStats(api_key) as client:
        platforms = await client.get_platforms()
    logger.info("rlstats %s fetched %d platforms", __version__, len(platforms))
    for platform in platforms:
        print(f"{platform.id}: {platform.name}")


if __name__ == "__main__":
    asyncio.run(main())
