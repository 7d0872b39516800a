from pydantic import BaseModel

from ...core.constants import DEFAULT_STUDIO_NAME


class StudioInfo(BaseModel):
    name: str = DEFAULT_STUDIO_NAME
    description: str = ""
    address: str = ""
    phone: str = ""
    instagram: str = ""
