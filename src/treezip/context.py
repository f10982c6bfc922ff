"""
Editor context passed to content providers.

Providers only need the rendered markup and styles of the host editor.
``StaticEditor`` supplies them from strings or files for command line use.
"""

from pathlib import Path
from typing import Optional, Protocol, Union, runtime_checkable


@runtime_checkable
class EditorContext(Protocol):
    """Live state of the host editor"""

    def get_html(self) -> str:
        ...

    def get_css(self) -> str:
        ...


class StaticEditor:
    """Editor context backed by fixed markup and styles"""

    def __init__(self, html: str = "", css: str = ""):
        self.html = html
        self.css = css

    @classmethod
    def from_files(
        cls,
        html_path: Optional[Union[str, Path]] = None,
        css_path: Optional[Union[str, Path]] = None,
    ) -> "StaticEditor":
        """
        Load markup and styles from files.

        Args:
            html_path: File with the page body markup
            css_path: File with the page styles

        Returns:
            StaticEditor: Context holding the file contents
        """
        html = Path(html_path).read_text(encoding="utf-8") if html_path else ""
        css = Path(css_path).read_text(encoding="utf-8") if css_path else ""
        return cls(html=html, css=css)

    def get_html(self) -> str:
        return self.html

    def get_css(self) -> str:
        return self.css
