"""
Data models for the Qdrant SDK.

Request bodies are plain dictionaries in the server's JSON shape; the
dataclasses here cover the results the facade unwraps most often, plus a
few helpers for building request bodies.
"""

from typing import List, Dict, Any, Optional, Union
from dataclasses import dataclass
from enum import Enum

PointId = Union[str, int]


class Distance(Enum):
    """Supported distance metrics for vector similarity."""

    COSINE = "Cosine"
    EUCLID = "Euclid"
    DOT = "Dot"
    MANHATTAN = "Manhattan"


class UpdateStatus(Enum):
    ACKNOWLEDGED = "acknowledged"
    COMPLETED = "completed"


@dataclass
class PointStruct:
    """A point to upsert: id, vector and optional payload."""

    id: PointId
    vector: Union[List[float], Dict[str, Any]]
    payload: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert point to dictionary format."""
        result: Dict[str, Any] = {"id": self.id, "vector": self.vector}
        if self.payload is not None:
            result["payload"] = self.payload
        return result


@dataclass
class VectorParams:
    """Vector storage parameters for a new collection."""

    size: int
    distance: Distance
    on_disk: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"size": self.size, "distance": self.distance.value}
        if self.on_disk is not None:
            result["on_disk"] = self.on_disk
        return result


@dataclass
class Filter:
    """Query filter for search operations."""

    must: Optional[List[Dict[str, Any]]] = None
    must_not: Optional[List[Dict[str, Any]]] = None
    should: Optional[List[Dict[str, Any]]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert filter to dictionary format."""
        result = {}
        if self.must:
            result["must"] = self.must
        if self.must_not:
            result["must_not"] = self.must_not
        if self.should:
            result["should"] = self.should
        return result


@dataclass
class ScoredPoint:
    """A search hit with its score."""

    id: PointId
    score: float
    version: Optional[int] = None
    payload: Optional[Dict[str, Any]] = None
    vector: Optional[Any] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoredPoint":
        return cls(
            id=data["id"],
            score=data["score"],
            version=data.get("version"),
            payload=data.get("payload"),
            vector=data.get("vector"),
        )


@dataclass
class Record:
    """A stored point as returned by retrieve and scroll."""

    id: PointId
    payload: Optional[Dict[str, Any]] = None
    vector: Optional[Any] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Record":
        return cls(id=data["id"], payload=data.get("payload"), vector=data.get("vector"))


@dataclass
class ScrollResult:
    """One page of scrolled points and the offset of the next page."""

    points: List[Record]
    next_page_offset: Optional[PointId] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScrollResult":
        return cls(
            points=[Record.from_dict(point) for point in data.get("points", [])],
            next_page_offset=data.get("next_page_offset"),
        )


@dataclass
class UpdateResult:
    """Outcome of a write operation."""

    status: UpdateStatus
    operation_id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UpdateResult":
        return cls(
            status=UpdateStatus(data["status"]),
            operation_id=data.get("operation_id"),
        )


@dataclass
class CountResult:
    count: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CountResult":
        return cls(count=data["count"])


@dataclass
class CollectionDescription:
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CollectionDescription":
        return cls(name=data["name"])


@dataclass
class SnapshotDescription:
    name: str
    creation_time: Optional[str] = None
    size: Optional[int] = None
    checksum: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SnapshotDescription":
        return cls(
            name=data["name"],
            creation_time=data.get("creation_time"),
            size=data.get("size"),
            checksum=data.get("checksum"),
        )


@dataclass
class VersionInfo:
    """Server identification returned by the root endpoint."""

    title: str
    version: str
    commit: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VersionInfo":
        return cls(
            title=data.get("title", ""),
            version=data["version"],
            commit=data.get("commit"),
        )
