from pydantic import BaseModel
from typing import Optional, List, Dict, Any

class Manifest(BaseModel):
    id: str
    version: str
    name: str
    description: str
    logo: Optional[str] = None
    background: Optional[str] = None
    resources: List[str]
    types: List[str]
    catalogs: List[Dict[str, Any]]
    idPrefixes: Optional[List[str]] = None
    behaviorHints: Optional[Dict[str, Any]] = None

class MetaPreview(BaseModel):
    id: str
    type: str
    name: Optional[str] = None
    poster: Optional[str] = None
    posterShape: Optional[str] = None
    logo: Optional[str] = None
    description: Optional[str] = None
    background: Optional[str] = None

class MetaDetail(BaseModel):
    id: str
    type: str
    name: Optional[str] = None
    poster: Optional[str] = None
    posterShape: Optional[str] = None
    logo: Optional[str] = None
    background: Optional[str] = None
    description: Optional[str] = None
    runtime: Optional[str] = None
    genres: Optional[List[str]] = None

class Stream(BaseModel):
    name: Optional[str] = None
    title: Optional[str] = None
    # Either url (playable) or externalUrl (opens the website) is set
    url: Optional[str] = None
    externalUrl: Optional[str] = None
    behaviorHints: Optional[Dict[str, Any]] = None

class CatalogResponse(BaseModel):
    metas: List[MetaPreview]

class MetaResponse(BaseModel):
    meta: Optional[MetaDetail] = None

class StreamResponse(BaseModel):
    streams: List[Stream]

class HealthResponse(BaseModel):
    status: str
    addon: str
    version: str
