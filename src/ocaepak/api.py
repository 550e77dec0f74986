"""Module-level OCA operations.

Each call opens its own client and closes it afterwards, so calls share no
state. Pass ``client`` to reuse an existing ``OcaClient`` instead; it is left
open.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from ocaepak.client import OcaClient
from ocaepak.models import Envio, EventoPieza, Provincia, Tarifa


@asynccontextmanager
async def _session(client: OcaClient | None) -> AsyncIterator[OcaClient]:
    if client is not None:
        yield client
        return

    async with OcaClient() as oca:
        yield oca


async def list_envios(
    *,
    cuit: str,
    fecha_desde: str,
    fecha_hasta: str,
    client: OcaClient | None = None,
) -> list[Envio]:
    """Return the shipments created by a customer in a date range.

    Example::

        await list_envios(cuit="30-71448151-3", fecha_desde="02/06/2016", fecha_hasta="03/06/2016")
    """
    async with _session(client) as oca:
        return await oca.list_envios(cuit=cuit, fecha_desde=fecha_desde, fecha_hasta=fecha_hasta)


async def tarifar_envio_corporativo(
    *,
    operativa: str,
    cuit: str,
    peso_total: str,
    volumen_total: str,
    codigo_postal_origen: str,
    codigo_postal_destino: str,
    cantidad_paquetes: str,
    valor_declarado: str,
    client: OcaClient | None = None,
) -> list[Tarifa]:
    """Return the shipping cost, delivery time and other details of a shipment."""
    async with _session(client) as oca:
        return await oca.tarifar_envio_corporativo(
            operativa=operativa,
            cuit=cuit,
            peso_total=peso_total,
            volumen_total=volumen_total,
            codigo_postal_origen=codigo_postal_origen,
            codigo_postal_destino=codigo_postal_destino,
            cantidad_paquetes=cantidad_paquetes,
            valor_declarado=valor_declarado,
        )


async def get_provincias(*, client: OcaClient | None = None) -> list[Provincia]:
    """Return the list of provinces."""
    async with _session(client) as oca:
        return await oca.get_provincias()


async def get_localidades_by_provincia(
    *,
    id_provincia: str,
    client: OcaClient | None = None,
) -> list[str]:
    """Return the names of the localities in a province."""
    async with _session(client) as oca:
        return await oca.get_localidades_by_provincia(id_provincia=id_provincia)


async def tracking_pieza(
    *,
    pieza: str,
    nro_documento_cliente: str = "0",
    cuit: str = "0",
    client: OcaClient | None = None,
) -> list[EventoPieza]:
    """Return the tracking history of a piece.

    Example::

        await tracking_pieza(pieza="4610700000000000648")
    """
    async with _session(client) as oca:
        return await oca.tracking_pieza(
            pieza=pieza, nro_documento_cliente=nro_documento_cliente, cuit=cuit
        )
