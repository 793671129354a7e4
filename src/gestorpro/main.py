from __future__ import annotations

import logging

from gestorpro.application.container import build_container
from gestorpro.config import get_app_paths
from gestorpro.logging_config import setup_logging
from gestorpro.ui.app import App


def main() -> None:
    paths = get_app_paths()
    setup_logging(paths.logs_dir, level=logging.INFO)

    container = build_container(paths.base_dir)

    app = App(
        controller=container.controller,
        db_path=str(paths.db_path),
        logs_dir=str(paths.logs_dir),
    )
    app.mainloop()


if __name__ == "__main__":
    main()
