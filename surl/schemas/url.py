from pydantic import BaseModel, Field


class ShortURLResponse(BaseModel):
    """Body returned by POST /new"""
    url: str = Field(..., description="Public short URL: configured website + identifier")


class ServiceInfo(BaseModel):
    name: str
    version: str
