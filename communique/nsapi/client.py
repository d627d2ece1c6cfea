"""NationStates API client — raw member lists for regions and world tags.

Endpoints (all on api.cgi, XML responses):
  region=<name>&q=nations   <REGION><NATIONS>a:b:c</NATIONS></REGION>
  wa=1&q=members            <WA><MEMBERS>a,b,c</MEMBERS></WA>
  wa=1&q=delegates          <WA><DELEGATES>a,b,c</DELEGATES></WA>
  q=newnations              <WORLD><NEWNATIONS>a,b,c</NEWNATIONS></WORLD>
  q=nations                 <WORLD><NATIONS>a,b,c</NATIONS></WORLD>
"""

import logging
import xml.etree.ElementTree as ET
from typing import Optional

import httpx

from ..recipients.tokens import reference_name
from .ratelimit import RequestLimiter

logger = logging.getLogger("communique.nsapi.client")

DEFAULT_API_URL = "https://www.nationstates.net/cgi-bin/api.cgi"


def parse_name_list(xml_text: str, element: str, separator: str) -> list[str]:
    """Extract a separated name list from an API response.

    Returns reference names in response order, empty entries dropped.
    Raises ValueError if the element is missing.
    """
    root = ET.fromstring(xml_text)
    node = root if root.tag == element else root.find(f".//{element}")
    if node is None:
        raise ValueError(f"API response has no <{element}> element")
    text = node.text or ""
    return [reference_name(n) for n in text.split(separator) if n.strip()]


class NationStatesClient:
    """Thin async client over the NationStates API."""

    def __init__(
        self,
        user_agent: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        limiter: Optional[RequestLimiter] = None,
    ):
        self.user_agent = user_agent
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.limiter = limiter or RequestLimiter()

    async def query(self, params: dict) -> str:
        """Perform one rate-limited API request and return the response body.

        Raises httpx.HTTPStatusError on 4xx/5xx and httpx transport errors.
        """
        await self.limiter.acquire()
        logger.debug(f"API request: {params}")
        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent},
        ) as client:
            resp = await client.get(self.base_url, params=params)
            resp.raise_for_status()
            return resp.text

    async def region_nations(self, region: str) -> list[str]:
        xml_text = await self.query({"region": reference_name(region), "q": "nations"})
        return parse_name_list(xml_text, "NATIONS", ":")

    async def wa_members(self) -> list[str]:
        xml_text = await self.query({"wa": "1", "q": "members"})
        return parse_name_list(xml_text, "MEMBERS", ",")

    async def wa_delegates(self) -> list[str]:
        xml_text = await self.query({"wa": "1", "q": "delegates"})
        return parse_name_list(xml_text, "DELEGATES", ",")

    async def new_nations(self) -> list[str]:
        xml_text = await self.query({"q": "newnations"})
        return parse_name_list(xml_text, "NEWNATIONS", ",")

    async def all_nations(self) -> list[str]:
        xml_text = await self.query({"q": "nations"})
        return parse_name_list(xml_text, "NATIONS", ",")
