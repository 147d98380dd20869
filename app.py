"""RecipeGen proxy server.

Serves POST /api/generate, the only place the Gemini API key and the shared
password are held. Configure with GEMINI_API_KEY, APP_BASIC_AUTH_PASS,
GEMINI_MODEL, HOST and PORT (see recipegen/utils/config.py).

Run with: python app.py
"""

import uvicorn

from recipegen.api.app import create_app
from recipegen.utils.config import config
from recipegen.utils.logger import logger


app = create_app()


if __name__ == "__main__":
    if not config.APP_BASIC_AUTH_PASS:
        logger.warning("APP_BASIC_AUTH_PASS is not set: every request will be rejected with 401")
    if not config.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY is not set: authenticated requests will fail with 500")

    logger.info(f"Starting RecipeGen proxy on {config.HOST}:{config.PORT} (model: {config.GEMINI_MODEL})")
    uvicorn.run(app, host=config.HOST, port=config.PORT)
