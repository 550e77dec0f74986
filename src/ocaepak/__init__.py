"""Async client for the OCA e-Pak shipment tracking web service."""

from ocaepak.api import (
    get_localidades_by_provincia,
    get_provincias,
    list_envios,
    tarifar_envio_corporativo,
    tracking_pieza,
)
from ocaepak.client import OcaClient
from ocaepak.config import settings
from ocaepak.errors import OcaError, ParseError, ShapeError, TransportError, UpstreamError
from ocaepak.models import Envio, EventoPieza, Provincia, Tarifa

__all__ = [
    "Envio",
    "EventoPieza",
    "OcaClient",
    "OcaError",
    "ParseError",
    "Provincia",
    "ShapeError",
    "Tarifa",
    "TransportError",
    "UpstreamError",
    "get_localidades_by_provincia",
    "get_provincias",
    "list_envios",
    "settings",
    "tarifar_envio_corporativo",
    "tracking_pieza",
]
