"""
Static index page generation.

Buckets can't list their contents, so every published directory gets an
index.html linking to its subdirectories and files.
"""

import html
import logging
import os
from pathlib import Path
from string import Template
from typing import List, Union

from ..models.config import IndexPageConfig
from ..utils.compression import write_file
from ..utils.constants import INDEX_PAGE_FILENAME
from ..utils.logging_utils import format_count_with_unit

INDEX_PAGE_TEMPLATE = Template(
    """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>${title}</title></head>
<body>
<h1>${title}</h1>
<ul>
${entries}
</ul>
</body>
</html>
"""
)

ENTRY_TEMPLATE = Template('<li><a href="${href}">${name}</a></li>')


def render_index_page(title: str, directories: List[str], files: List[str]) -> str:
    """
    Render the index page of one directory.

    Args:
        title: Page title
        directories: Subdirectory names
        files: File names

    Returns:
        HTML document
    """
    entries = [ENTRY_TEMPLATE.substitute(href="../", name="..")]
    for name in directories:
        entries.append(ENTRY_TEMPLATE.substitute(href=html.escape(f"{name}/"), name=html.escape(f"{name}/")))
    for name in files:
        entries.append(ENTRY_TEMPLATE.substitute(href=html.escape(name), name=html.escape(name)))

    return INDEX_PAGE_TEMPLATE.substitute(title=html.escape(title), entries="\n".join(entries))


class StaticIndexPageBuilder:
    """
    Writes index.html files for a directory tree.

    Implements the IndexPageBuilderProtocol.
    """

    def __init__(self, config: IndexPageConfig) -> None:
        self.config = config

    def build_index_page(self, directory: Union[str, os.PathLike], bucket: str) -> None:
        """
        Write an index.html into every directory below ``directory``.

        Args:
            directory: Directory tree to index
            bucket: Bucket the tree is published to, used in page titles

        Raises:
            OSError: If the directory can't be read or a page can't be written
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise NotADirectoryError(f"Not a directory: {directory}")

        pages = 0
        for current, dirnames, filenames in os.walk(directory, onerror=_raise):
            dirnames.sort()
            files = sorted(name for name in filenames if name != INDEX_PAGE_FILENAME)

            relative = Path(current).relative_to(directory).as_posix()
            location = bucket if relative == "." else f"{bucket}/{relative}"
            page = render_index_page(f"{self.config.title_prefix} {location}", dirnames, files)

            write_file(Path(current) / INDEX_PAGE_FILENAME, page.encode("utf-8"))
            pages += 1

        logging.info("Wrote %s for %s", format_count_with_unit(pages, "index page"), directory)


def _raise(error: OSError) -> None:
    raise error


__all__ = ["render_index_page", "StaticIndexPageBuilder"]
