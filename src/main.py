import argparse
import asyncio
import os
import sys
import logging
from aiohttp import web
from dotenv import load_dotenv

from src.infrastructure.database import PostgresRepository
from src.infrastructure.http_api import create_app
from src.application.recommendation_service import RecommendationService
from src.application.seed import seed

logger = logging.getLogger(__name__)

def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

async def serve(repository: PostgresRepository, host: str, port: int) -> None:
    service = RecommendationService(repository=repository)
    runner = web.AppRunner(create_app(service))
    await runner.setup()

    site = web.TCPSite(runner, host, port)
    await site.start()
    logger.info(f"Serving recommendations on http://{host}:{port}")

    try:
        # Run until cancelled
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()

async def main(argv=None):
    parser = argparse.ArgumentParser(description="Recommendation catalog")
    parser.add_argument("command", nargs="?", choices=["serve", "seed", "reset"], default="serve")
    args = parser.parse_args(argv)

    # Load environment variables from .env file
    load_dotenv()
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    db_url = os.getenv("DATABASE_URL")
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "5000"))

    if not db_url:
        logger.error("DATABASE_URL is not set in the environment.")
        sys.exit(1)

    repository = PostgresRepository(db_url=db_url)

    try:
        await repository.create_schema()
        if args.command == "seed":
            await seed(repository)
        elif args.command == "reset":
            await repository.delete_all()
            logger.info("All recommendations deleted.")
        else:
            await serve(repository, host, port)
    except Exception as e:
        logger.exception(f"An unexpected error occurred: {e}")
        sys.exit(1)
    finally:
        await repository.dispose()

if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted by user. Exiting gracefully.")
