"""
Module for saving found images to local storage.
"""

from pathlib import Path
from typing import List, Optional

import requests

from notes_app.config import config
from notes_app.utils.helpers import image_filename
from notes_app.utils.logger import logging


class ImageDownloader:
    """Download image URLs into files named after the video."""

    def __init__(
        self,
        output_directory: Optional[Path] = None,
        timeout: float = config.REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        self.output_directory = Path(output_directory or config.IMAGES_DIR)
        self.timeout = timeout
        self.session = session or requests.Session()

    def save(self, url: str, path: Path) -> None:
        """Download one image to ``path``."""
        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            f.write(response.content)

    def save_all(self, urls: List[str], title: str) -> List[str]:
        """
        Save every image, skipping the ones that fail.

        Args:
            urls: Image URLs in discovery order
            title: Video title used to name the files

        Returns:
            Paths of the files written
        """
        saved = []
        root = self.output_directory.resolve()
        for index, url in enumerate(urls, start=1):
            path = self.output_directory / image_filename(url, title, index)
            if root not in path.resolve().parents:
                logging.error(f"Refusing to write {url} outside {root}: {path}")
                continue
            logging.info(f"Downloading {url} to {path}")
            try:
                self.save(url, path)
            except (requests.RequestException, OSError) as e:
                logging.error(f"Failed to download URL: {url}: {e}")
                continue
            saved.append(str(path))
        return saved
