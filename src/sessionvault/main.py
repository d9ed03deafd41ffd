"""Console entry point: ``sessionvault`` starts the API server."""

from pydantic import ValidationError as SettingsError

from sessionvault.app import App
from sessionvault.config import Config
from sessionvault.logging import setup_logging
from sessionvault.web.runner import run_server


def main() -> None:
    try:
        config = Config()
    except SettingsError as e:
        raise SystemExit(f"Invalid SESSIONVAULT_* configuration:\n{e}") from e
    setup_logging(config.debug)
    run_server(App(config), config)


if __name__ == "__main__":
    main()
