"""Records returned by the OCA operations.

Keys keep the upstream naming (including the ``desdcripcion_Estado``
misspelling) so existing consumers can read them unchanged. Every value is
the element text as received; nothing is converted.
"""

from typing import TypedDict


class Envio(TypedDict):
    """A shipment created by a customer."""

    nroProducto: str
    numeroEnvio: str


class Tarifa(TypedDict):
    """A corporate shipping quote."""

    tarifador: str
    precio: str
    idTiposervicio: str
    ambito: str
    plazoEntrega: str
    adicional: str
    total: str


class Provincia(TypedDict):
    """A province known to OCA."""

    idProvincia: str
    descripcion: str


class EventoPieza(TypedDict):
    """One entry of a piece's tracking history."""

    numeroEnvio: str
    descripcion_Motivo: str
    desdcripcion_Estado: str
    suc: str
    fecha: str
