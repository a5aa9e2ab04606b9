"""Search result schemas."""

from pydantic import BaseModel


class EquipmentResponse(BaseModel):
    """A camera body or lens as recorded in file metadata.

    The values are the ones accepted by the ``cameraMake``/``cameraModel`` and
    ``lensMake``/``lensModel`` listing filters.
    """

    make: str
    model: str
