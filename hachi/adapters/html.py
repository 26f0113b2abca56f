"""
Recuperation et parsing de documents HTML.

Implemente IDocumentFetcher avec httpx et IParsedDocument avec
BeautifulSoup. Les en-tetes imitent un navigateur italien: les sites amont
servent un contenu different (ou refusent) sans eux.

Usage:
    fetcher = HTMLFetcher()
    document = await fetcher.fetch("https://vixcloud.co/embed/123")
    scripts = document.scripts_text()
    await fetcher.close()
"""

from typing import Optional

import httpx
from bs4 import BeautifulSoup
from loguru import logger

from hachi.adapters.api.retry import request_with_retry
from hachi.core.ports.documents import IDocumentFetcher, IParsedDocument

DEFAULT_REFERER = "https://www.google.it/"

BROWSER_HEADERS = {
    "Accept": "text/html, application/xhtml+xml",
    "Accept-Encoding": "gzip, deflate, br",
    "Accept-Language": "it-IT,it;q=0.9,en-US;q=0.8,en;q=0.7",
    "Connection": "keep-alive",
    "Cache-Control": "no-cache",
}


class HTMLDocument(IParsedDocument):
    """Document HTML parse par BeautifulSoup."""

    def __init__(self, html: str, url: str = "") -> None:
        self._soup = BeautifulSoup(html, "html.parser")
        self._url = url

    @property
    def url(self) -> str:
        return self._url

    def select_text(self, selector: str) -> Optional[str]:
        element = self._soup.select_one(selector)
        if element is None:
            return None
        return element.get_text()

    def select_attr(self, selector: str, attribute: str) -> Optional[str]:
        element = self._soup.select_one(selector)
        if element is None:
            return None
        value = element.get(attribute)
        return value if isinstance(value, str) else None

    def select_all_attr(self, selector: str, attribute: str) -> list[str]:
        values = []
        for element in self._soup.select(selector):
            value = element.get(attribute)
            if isinstance(value, str):
                values.append(value)
        return values

    def scripts_text(self) -> str:
        # Equivalent de $("script").text(): concatenation sans separateur
        return "".join(script.get_text() for script in self._soup.find_all("script"))


class HTMLFetcher(IDocumentFetcher):
    """
    Client HTTP retournant des documents HTML parses.

    Le client httpx est cree a la premiere requete et suit les redirections.
    """

    def __init__(self, user_agent: Optional[str] = None, timeout: float = 30.0) -> None:
        self._user_agent = user_agent
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            headers = dict(BROWSER_HEADERS)
            if self._user_agent:
                headers["User-Agent"] = self._user_agent
            self._client = httpx.AsyncClient(
                headers=headers,
                timeout=self._timeout,
                follow_redirects=True,
            )
        return self._client

    async def fetch(self, url: str, referer: Optional[str] = None) -> HTMLDocument:
        """
        Telecharge et parse un document HTML.

        Args:
            url: URL absolue du document
            referer: Header Referer (defaut: Google Italie)

        Raises:
            httpx.HTTPStatusError: Sur une reponse non-2xx
        """
        client = self._get_client()
        logger.debug("Recuperation du document", url=url)
        response = await request_with_retry(
            client, "GET", url, headers={"Referer": referer or DEFAULT_REFERER}
        )
        return HTMLDocument(response.text, url=str(response.url))

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
