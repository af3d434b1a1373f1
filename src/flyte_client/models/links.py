"""Hypermedia link models returned by the Flyte API root resource."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Namespaced relations look like "http://example.com/swagger#!/info/health"
SHORT_REL_SEPARATOR = "#!/"


class Link(BaseModel):
    """A single (relation, href) pair."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    rel: str = Field(..., description="Link relation, a token or a namespaced URI")
    href: str = Field(..., description="Target URL of the link")

    @property
    def short_rel(self) -> str:
        """Relation with any swagger namespace prefix removed."""
        _, sep, name = self.rel.rpartition(SHORT_REL_SEPARATOR)
        return name if sep else self.rel

    def matches(self, rel: str) -> bool:
        return self.rel == rel or self.short_rel == rel


class LinkDocument(BaseModel):
    """Ordered, immutable set of links advertised by the API.

    Relations are not required to be unique; lookups always take the first
    match in document order.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    links: tuple[Link, ...] = Field(
        default_factory=tuple, description="Links in document order"
    )

    @field_validator("links", mode="before")
    @classmethod
    def default_missing_links(cls, v: object) -> object:
        if v is None:
            return ()
        return v

    @property
    def relations(self) -> list[str]:
        return [link.rel for link in self.links]
