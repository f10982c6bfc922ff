"""
Default export template.

Produces an ``index.html`` page wrapping the editor markup together with
the editor styles in ``css/style.css``. The external libraries the page
links to can be bundled into ``vendor/`` instead of referenced remotely.
"""

from typing import Any, Iterable, Optional
from urllib.parse import urlparse

import httpx

from treezip.constants import (
    ASSET_DOWNLOAD_TIMEOUT,
    DEFAULT_CANVAS_SCRIPTS,
    DEFAULT_CANVAS_STYLES,
    VENDOR_DIR_NAME,
)
from treezip.tree.nodes import Directory, Leaf, Provider

_TEXT_CONTENT_TYPES = ("text/", "javascript", "json", "xml", "css")


def canvas_styles(urls: Iterable[str] = DEFAULT_CANVAS_STYLES) -> str:
    """Stylesheet link tags, one per line"""
    return "\n".join(f'<link rel="stylesheet" href="{url}">' for url in urls)


def canvas_scripts(urls: Iterable[str] = DEFAULT_CANVAS_SCRIPTS) -> str:
    """Script tags, one per line"""
    return "\n".join(f'<script src="{url}"></script>' for url in urls)


def render_index(context: Any, styles: str, scripts: str) -> str:
    """Render the index page around the editor markup"""
    return (
        "<!doctype html>\n"
        '<html lang="en">\n'
        "  <head>\n"
        '    <meta charset="utf-8">\n'
        f"    {styles}\n"
        '    <link rel="stylesheet" href="./css/style.css">\n'
        "  </head>\n"
        f"  {context.get_html()}\n"
        "\n"
        f"  {scripts}\n"
        "</html>"
    )


def asset_name(url: str) -> str:
    """File name used for a downloaded asset"""
    name = urlparse(url).path.rstrip("/").rsplit("/", 1)[-1]
    return name or "asset"


def fetch_url(
    url: str,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = ASSET_DOWNLOAD_TIMEOUT,
) -> Provider:
    """
    Provider downloading a remote file.

    Textual responses are returned as text, everything else as bytes.

    Args:
        url: Address of the file
        client: Shared client, a short lived one is opened when None
        timeout: Request timeout for the short lived client

    Returns:
        Provider: Async provider yielding the file content
    """

    async def download(context: Any):
        if client is not None:
            response = await client.get(url)
        else:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as owned:
                response = await owned.get(url)
        response.raise_for_status()

        content_type = response.headers.get("content-type", "").lower()
        if any(marker in content_type for marker in _TEXT_CONTENT_TYPES):
            return Leaf(response.text)
        return Leaf(response.content)

    return Provider(download)


def default_root(
    bundle_assets: bool = False,
    client: Optional[httpx.AsyncClient] = None,
) -> Directory:
    """
    Build the default export tree.

    Args:
        bundle_assets: Download the linked libraries into vendor/ and point
            the page at the local copies
        client: HTTP client used for the downloads

    Returns:
        Directory: Root of the template
    """
    style_urls = list(DEFAULT_CANVAS_STYLES)
    script_urls = list(DEFAULT_CANVAS_SCRIPTS)

    entries = {
        "css": Directory({"style.css": Provider(lambda editor: Leaf(editor.get_css()))}),
    }

    if bundle_assets:
        entries[VENDOR_DIR_NAME] = Directory(
            {asset_name(url): fetch_url(url, client) for url in style_urls + script_urls}
        )
        style_urls = [f"./{VENDOR_DIR_NAME}/{asset_name(url)}" for url in style_urls]
        script_urls = [f"./{VENDOR_DIR_NAME}/{asset_name(url)}" for url in script_urls]

    styles = canvas_styles(style_urls)
    scripts = canvas_scripts(script_urls)
    entries["index.html"] = Provider(
        lambda editor: Leaf(render_index(editor, styles, scripts))
    )
    return Directory(entries)
