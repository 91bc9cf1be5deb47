from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter


# Browser -> server


class InputEvent(BaseModel):
    type: Literal["input"]
    value: str = ""


class SelectEvent(BaseModel):
    type: Literal["select"]
    id: Optional[str] = None


ClientEvent = Annotated[Union[InputEvent, SelectEvent], Field(discriminator="type")]

client_event_adapter = TypeAdapter(ClientEvent)


# Server -> browser


class PatchMessage(BaseModel):
    type: Literal["patch"] = "patch"
    target: str
    html: str
    style: Optional[str] = None


class NotifyMessage(BaseModel):
    type: Literal["notify"] = "notify"
    level: Literal["success", "info", "failure"]
    message: str
