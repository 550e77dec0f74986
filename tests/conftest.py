"""Pytest configuration and fixtures."""

from collections.abc import Callable

import httpx
import pytest

from ocaepak.client import OcaClient

DIFFGRAM_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<DataSet xmlns="#Oca_e_Pak">
  <xs:schema id="NewDataSet" xmlns="" xmlns:xs="http://www.w3.org/2001/XMLSchema"
             xmlns:msdata="urn:schemas-microsoft-com:xml-msdata">
    <xs:element name="NewDataSet" msdata:IsDataSet="true" />
  </xs:schema>
  <diffgr:diffgram xmlns:msdata="urn:schemas-microsoft-com:xml-msdata"
                   xmlns:diffgr="urn:schemas-microsoft-com:xml-diffgram-v1">
    <NewDataSet xmlns="">{rows}
    </NewDataSet>
  </diffgr:diffgram>
</DataSet>
"""

LOCALIDADES_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<Localidades>{places}
</Localidades>
"""


def _diffgram(*rows: dict[str, str]) -> str:
    tables = []
    for i, row in enumerate(rows):
        cells = "".join(f"<{name}>{value}</{name}>" for name, value in row.items())
        tables.append(
            f'\n      <Table diffgr:id="Table{i + 1}" msdata:rowOrder="{i}">{cells}</Table>'
        )
    return DIFFGRAM_TEMPLATE.format(rows="".join(tables))


def _localidades(*names: str) -> str:
    places = "".join(f"\n  <Provincia><Nombre>{name}</Nombre></Provincia>" for name in names)
    return LOCALIDADES_TEMPLATE.format(places=places)


@pytest.fixture
def diffgram() -> Callable[..., str]:
    """Build a .NET DataSet diffgram document from row dicts."""
    return _diffgram


@pytest.fixture
def localidades() -> Callable[..., str]:
    """Build a Localidades document from locality names."""
    return _localidades


@pytest.fixture
def sent_requests() -> list[httpx.Request]:
    """Requests seen by clients built with ``make_client``."""
    return []


@pytest.fixture
async def make_client(sent_requests):
    """Create OcaClients whose requests are answered by a fake upstream.

    The handler may return an ``httpx.Response`` or a string, which is sent
    as a 200 XML body.
    """
    clients: list[OcaClient] = []

    def factory(handler, **kwargs) -> OcaClient:
        async def respond(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            result = handler(request)
            if hasattr(result, "__await__"):
                result = await result
            if isinstance(result, str):
                return httpx.Response(
                    200,
                    content=result.encode("utf-8"),
                    headers={"Content-Type": "text/xml; charset=utf-8"},
                )
            return result

        client = OcaClient(transport=httpx.MockTransport(respond), **kwargs)
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.aclose()
