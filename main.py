"""PostForge: write once, convert for LinkedIn, WhatsApp and email."""

import logging
import os
import sys
from pathlib import Path

# Add project directory to path for module imports
sys.path.insert(0, str(Path(__file__).parent))

from dotenv import load_dotenv

# Load .env from the project directory
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)


def main():
    from web.app import create_app

    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app()
    app.run(
        host=os.environ.get("HOST", "localhost"),
        port=int(os.environ.get("PORT", "5001")),
        debug=False,
    )


if __name__ == "__main__":
    main()
