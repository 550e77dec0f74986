"""Async client for the OCA e-Pak web service."""

import logging
from typing import Any, cast

import httpx

from ocaepak.catalog import OperationConfig, ServiceConfig, load_service_config
from ocaepak.config import settings
from ocaepak.errors import ShapeError, TransportError
from ocaepak.models import Envio, EventoPieza, Provincia, Tarifa
from ocaepak.parsing import (
    children,
    dataset_rows,
    first_value,
    local_name,
    map_row,
    parse_response,
)

logger = logging.getLogger(__name__)

# Marks "use the configured timeout", since None means no timeout at all
_DEFAULT_TIMEOUT: Any = object()


class OcaClient:
    """Client for the OCA e-Pak tracking and quoting service.

    Every method performs a single GET and returns the mapped rows, or raises
    an ``OcaError`` subclass. Use it as an async context manager, or call
    ``aclose`` when done::

        async with OcaClient() as oca:
            envios = await oca.list_envios(
                cuit="30-71448151-3", fecha_desde="02/06/2016", fecha_hasta="03/06/2016"
            )
    """

    def __init__(
        self,
        config: ServiceConfig | None = None,
        *,
        timeout: float | None = _DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or load_service_config(settings.service_file)
        self.base_url = settings.base_url or self.config.base_url
        if timeout is _DEFAULT_TIMEOUT:
            timeout = settings.timeout

        self.client = httpx.AsyncClient(
            headers={
                "User-Agent": settings.user_agent,
                "Accept": "text/xml, application/xml;q=0.9, */*;q=0.8",
            },
            follow_redirects=True,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "OcaClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()

    async def _get(self, operation: OperationConfig, **values: Any) -> httpx.Response:
        """Send the GET request for an operation."""
        url = operation.build_url(self.base_url, values)
        logger.debug("GET %s", url)

        try:
            return await self.client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"{operation.name}: {e!r}") from e

    async def _fetch_rows(self, name: str, **values: Any) -> list[dict[str, str]]:
        """Run a diffgram operation and map each row through its field map."""
        operation = self.config.operation(name)
        response = await self._get(operation, **values)
        rows = dataset_rows(parse_response(response))
        logger.debug("%s returned %d rows", name, len(rows))
        return [map_row(row, operation.fields, operation.strip) for row in rows]

    async def list_envios(self, *, cuit: str, fecha_desde: str, fecha_hasta: str) -> list[Envio]:
        """List the shipments a customer created between two dates.

        Args:
            cuit: Customer CUIT.
            fecha_desde: Start date, DD/MM/YYYY.
            fecha_hasta: End date, DD/MM/YYYY.
        """
        rows = await self._fetch_rows(
            "list_envios", cuit=cuit, fechaDesde=fecha_desde, fechaHasta=fecha_hasta
        )
        return cast(list[Envio], rows)

    async def tarifar_envio_corporativo(
        self,
        *,
        operativa: str,
        cuit: str,
        peso_total: str,
        volumen_total: str,
        codigo_postal_origen: str,
        codigo_postal_destino: str,
        cantidad_paquetes: str,
        valor_declarado: str,
    ) -> list[Tarifa]:
        """Quote price, delivery time and other details for a shipment.

        Args:
            operativa: Operational code agreed with OCA.
            cuit: Customer CUIT.
            peso_total: Total weight in kilograms.
            volumen_total: Total volume.
            codigo_postal_origen: Origin postal code.
            codigo_postal_destino: Destination postal code.
            cantidad_paquetes: Number of packages.
            valor_declarado: Declared value.
        """
        rows = await self._fetch_rows(
            "tarifar_envio_corporativo",
            cuit=cuit,
            operativa=operativa,
            pesoTotal=peso_total,
            volumenTotal=volumen_total,
            codigoPostalOrigen=codigo_postal_origen,
            codigoPostalDestino=codigo_postal_destino,
            cantidadPaquetes=cantidad_paquetes,
            valorDeclarado=valor_declarado,
        )
        return cast(list[Tarifa], rows)

    async def get_provincias(self) -> list[Provincia]:
        """List the provinces known to OCA."""
        rows = await self._fetch_rows("get_provincias")
        return cast(list[Provincia], rows)

    async def get_localidades_by_provincia(self, *, id_provincia: str) -> list[str]:
        """List the names of the localities in a province.

        This endpoint answers with its own ``<Localidades>`` document rather
        than a diffgram, so it returns plain names instead of records.
        """
        operation = self.config.operation("get_localidades_by_provincia")
        response = await self._get(operation, idProvincia=id_provincia)
        document = parse_response(response)

        if local_name(document) != "Localidades":
            raise ShapeError(f"Expected <Localidades>, got <{local_name(document)}>")

        names = [first_value(place, "Nombre") for place in children(document, "Provincia")]
        logger.debug("%s returned %d localities", operation.name, len(names))
        return names

    async def tracking_pieza(
        self,
        *,
        pieza: str,
        nro_documento_cliente: str = "0",
        cuit: str = "0",
    ) -> list[EventoPieza]:
        """Get the tracking history of a piece.

        When the piece number is known, the customer document number and
        CUIT are not needed and default to ``"0"``.
        """
        rows = await self._fetch_rows(
            "tracking_pieza",
            pieza=pieza,
            nroDocumentoCliente=nro_documento_cliente,
            cuit=cuit,
        )
        return cast(list[EventoPieza], rows)
