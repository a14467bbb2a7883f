from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, Optional, Tuple

from mcp_fetch.core.config import settings
from mcp_fetch.fetch.content import DEFAULT_CONTENT_SELECTORS

class FetchOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    timeout: int = Field(default_factory=lambda: settings.DEFAULT_TIMEOUT_MS, gt=0, description="Timeout in milliseconds")
    wait_for_selector: Optional[str] = Field(None, description="CSS selector to wait for after navigation")
    include_images: bool = Field(default=False, description="Keep image references in the Markdown")
    user_agent: str = Field(default_factory=lambda: settings.USER_AGENT, description="User agent string sent by the browser")
    content_selectors: Tuple[str, ...] = Field(
        default=DEFAULT_CONTENT_SELECTORS,
        description="Main-content selectors tried in order before falling back to <body>",
    )

class FetchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    title: str = ""
    markdown: str
    metadata: Dict[str, str] = Field(default_factory=dict)

    def to_text(self) -> str:
        """Render the result the way tool and resource responses carry it."""
        return f"# {self.title}\n\n{self.markdown}"

class FetchOutcome(BaseModel):
    url: str
    result: Optional[FetchResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.result is not None
