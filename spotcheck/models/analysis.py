"""Analysis result schemas - coordinates and citations"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    """Lat/lng pair in decimal degrees"""

    latitude: float
    longitude: float


class WebSource(BaseModel):
    """Web page citation from Google Search grounding"""

    kind: Literal["web"] = "web"
    uri: str
    title: str


class MapSource(BaseModel):
    """Place citation from Google Maps grounding"""

    kind: Literal["maps"] = "maps"
    uri: str
    title: str
    review_snippet_uris: list[str] = Field(default_factory=list)


Citation = Annotated[Union[WebSource, MapSource], Field(discriminator="kind")]


class TextSegment(BaseModel):
    text: str
    bold: bool = False


class DisplayLine(BaseModel):
    """Single rendered line of the analysis text"""

    is_list_item: bool = False
    segments: list[TextSegment] = Field(default_factory=list)

    @property
    def plain_text(self) -> str:
        return "".join(s.text for s in self.segments)


class AnalysisResult(BaseModel):
    """Normalized Gemini response for one analysis"""

    text: str
    coordinates: Optional[Coordinates] = None
    citations: list[Citation] = Field(default_factory=list)

    @property
    def web_sources(self) -> list[WebSource]:
        return [c for c in self.citations if isinstance(c, WebSource)]

    @property
    def map_sources(self) -> list[MapSource]:
        return [c for c in self.citations if isinstance(c, MapSource)]

    @property
    def latitude(self) -> Optional[float]:
        return self.coordinates.latitude if self.coordinates else None

    @property
    def longitude(self) -> Optional[float]:
        return self.coordinates.longitude if self.coordinates else None
