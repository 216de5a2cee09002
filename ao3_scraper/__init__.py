from loguru import logger

# Debug logs are enabled by AO3ApiClient(DEBUG=True)
logger.disable("ao3_scraper")
