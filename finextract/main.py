import sys
from pathlib import Path

from streamlit.web import cli as stcli

from finextract.config.settings import Settings
from finextract.logging.logger import Log

APP_PATH = Path(__file__).parent / "ui" / "app.py"


def main() -> None:
    """Entry point: load settings -> configure logging -> serve the Streamlit app."""
    settings = Settings()
    Log.configure(settings.log_level)
    Log.info(f"Starting FinExtract ({settings.app_env}), provider={settings.extraction_provider}")
    sys.argv = ["streamlit", "run", str(APP_PATH), *sys.argv[1:]]
    sys.exit(stcli.main())


if __name__ == "__main__":
    main()
