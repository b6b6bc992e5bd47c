"""High-level Markdown/tree-to-Slim conversion orchestrator.

Ties together the Markdown tree source, the output profile, the Slim filter
and the serializer into a single public API.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from slimfilter.formatter import to_string
from slimfilter.node import Node
from slimfilter.parser import MarkdownParser
from slimfilter.preferences import ATTRIBUTES_WRAPPER, WRAPPER_CHOICES, create_default_preferences
from slimfilter.profile import PROFILES, get_profile
from slimfilter.slim import SlimFilter

logger = logging.getLogger(__name__)


class Converter:
    """Convert Markdown or tag trees to Slim markup.

    Usage::

        converter = Converter(profile="html", attributes_wrapper="round")
        converter.convert_file("input.md", "output.slim")

        # or from string
        slim_text = converter.convert_text("# Hello")
    """

    PROFILES = list(PROFILES)
    WRAPPERS = WRAPPER_CHOICES

    def __init__(
        self,
        profile: str = "html",
        attributes_wrapper: str = "none",
        cursor: Optional[str] = None,
    ) -> None:
        if attributes_wrapper not in WRAPPER_CHOICES:
            raise ValueError(
                f"Unknown attributes wrapper {attributes_wrapper!r}. "
                f"Choose from: {', '.join(WRAPPER_CHOICES)}"
            )
        output_profile = get_profile(profile)
        if cursor is not None:
            output_profile = output_profile.derive(caret=cursor, place_cursor=bool(cursor))

        self.profile = output_profile
        self.preferences = create_default_preferences()
        self.preferences.set(ATTRIBUTES_WRAPPER, attributes_wrapper)
        self.parser = MarkdownParser()

    def convert_tree(self, tree: Node) -> str:
        """Filter *tree* in place and return the serialized Slim text."""
        slim = SlimFilter(self.profile, preferences=self.preferences)
        slim.process(tree)
        return to_string(tree)

    def convert_text(self, markdown_text: str) -> str:
        """Convert Markdown text to Slim.

        Args:
            markdown_text: Markdown source string.

        Returns:
            Slim template text.
        """
        tree = self.parser.parse(markdown_text)
        logger.debug("Parsed %d top-level nodes", len(tree.children))
        return self.convert_tree(tree)

    def convert_file(
        self,
        input_path: str | Path,
        output_path: str | Path,
        *,
        encoding: str = "utf-8",
    ) -> None:
        """Read a Markdown file and write the Slim output.

        Args:
            input_path: Path to the input ``.md`` file.
            output_path: Path for the output ``.slim`` file.
            encoding: Text encoding of the source file.
        """
        input_path = Path(input_path)
        output_path = Path(output_path)

        md_text = input_path.read_text(encoding=encoding)
        slim_text = self.convert_text(md_text)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(slim_text + "\n", encoding="utf-8")
