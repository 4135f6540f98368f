"""
build.py - package the dashboard as a single executable

    python build.py            # windowed build
    CI=1 python build.py       # keep the console so runner logs show output
"""
import logging
import os
import subprocess
import sys

logger = logging.getLogger("build")

APP_NAME = "Collectibles"


def pyinstaller_args(console: bool) -> list[str]:
    args = [
        "pyinstaller",
        "main.py",
        "--name",
        APP_NAME,
        "--clean",
        "--onefile",
        "--collect-all",
        "flet_desktop",
        "--collect-data",
        "flet",
    ]
    if not console:
        args.append("--noconsole")
    return args


def build() -> int:
    args = pyinstaller_args(console=bool(os.environ.get("CI")))
    logger.info("Running: %s", " ".join(args))
    returncode = subprocess.run(args).returncode
    if returncode == 0:
        logger.info("%s built into dist/", APP_NAME)
    else:
        logger.error("PyInstaller failed with exit code %d", returncode)
    return returncode


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    sys.exit(build())
