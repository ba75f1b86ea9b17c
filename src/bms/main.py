"""Application entry point for the BMS backend server."""

from bms.app import App
from bms.config import Config
from bms.logging import setup_logging
from bms.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
