"""Data models for link classification and verification."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union


class FollowPolicy(str, Enum):
    FOLLOWABLE = "followable"
    UNFOLLOWED = "unfollowed"


class LinkCategory(str, Enum):
    """Closed taxonomy every verification outcome is reduced to."""

    REACHABLE = "Reachable"
    CLIENT_ERROR = "Client Error"
    SERVER_ERROR = "Server Error"
    NETWORK_ISSUE = "Network Issue"
    REQUEST_SETUP_ERROR = "Request Setup Error"
    UNKNOWN_ERROR = "Unknown Error"

    @property
    def is_broken(self) -> bool:
        return self is not LinkCategory.REACHABLE


# Either an HTTP status code or a label such as "Timeout".
LinkStatus = Union[int, str]


@dataclass(frozen=True)
class AnchorReference:
    """A raw ``<a>`` tag as handed over by the HTML extractor."""

    raw_href: str
    rel: str = ""


@dataclass(frozen=True)
class ResolvedLink:
    """An anchor resolved to an absolute URL and classified."""

    absolute_url: str
    origin_matches_base: bool
    follow_policy: FollowPolicy

    @property
    def is_internal(self) -> bool:
        return self.origin_matches_base


@dataclass
class ClassifiedLinks:
    """The three disjoint link lists, in document order, duplicates kept."""

    internal: List[str] = field(default_factory=list)
    external_followable: List[str] = field(default_factory=list)
    external_unfollowed: List[str] = field(default_factory=list)
    resolved: List[ResolvedLink] = field(default_factory=list)

    def add(self, link: ResolvedLink) -> None:
        self.resolved.append(link)
        if link.is_internal:
            self.internal.append(link.absolute_url)
        elif link.follow_policy is FollowPolicy.UNFOLLOWED:
            self.external_unfollowed.append(link.absolute_url)
        else:
            self.external_followable.append(link.absolute_url)

    @property
    def all_urls(self) -> List[str]:
        return [link.absolute_url for link in self.resolved]


@dataclass(frozen=True)
class VerificationOutcome:
    """The settled result of checking one URL."""

    url: str
    status: LinkStatus
    category: LinkCategory

    @property
    def is_broken(self) -> bool:
        return self.category.is_broken


@dataclass(frozen=True)
class BrokenLink:
    url: str
    status: LinkStatus
    category: LinkCategory


@dataclass
class LinkReport:
    """Everything the link core hands to scoring and the response serializer."""

    links: ClassifiedLinks
    broken_links: List[BrokenLink] = field(default_factory=list)
    confirmed_broken_count: int = 0
    network_issue_count: int = 0
    checked_count: int = 0
