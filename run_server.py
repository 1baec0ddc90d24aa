#!/usr/bin/env python
import uvicorn
from dotenv import load_dotenv

if __name__ == "__main__":
    # Load environment variables before the app reads its settings
    load_dotenv()

    from app.config.settings import get_settings
    settings = get_settings()

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=True
    )
