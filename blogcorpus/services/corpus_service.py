import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from blogcorpus.errors import DuplicateIdentifier, PostError, UnreadablePost
from blogcorpus.schemas.post import Post, PostSummary
from blogcorpus.services.post_parser import parse_post

logger = logging.getLogger(__name__)


@dataclass
class CorpusLoadResult:
    posts: Dict[str, Post] = field(default_factory=dict)
    errors: List[PostError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class CorpusService:
    def __init__(self, repo, parser: Callable[..., Post] = parse_post):
        self.repo = repo
        self.parser = parser

    def load(self, strict: bool = False) -> CorpusLoadResult:
        """Parse every post the repo knows about into an identifier -> Post mapping.

        Bad posts are logged and collected in ``errors``; with ``strict=True`` the
        first one is raised instead.
        """
        result = CorpusLoadResult()
        seen = set()
        for path in self.repo.list_post_paths():
            identifier = self.repo.identifier_for(path)
            try:
                if identifier in seen:
                    raise DuplicateIdentifier(
                        f"{path} shares its identifier with an earlier post",
                        identifier,
                    )
                seen.add(identifier)
                text = self._read(path, identifier)
                result.posts[identifier] = self.parser(text, identifier=identifier)
            except PostError as e:
                if strict:
                    raise
                logger.warning(f"Skipping post {identifier}: {e.detail}")
                result.errors.append(e)

        logger.info(
            f"Loaded {len(result.posts)} posts ({len(result.errors)} skipped)"
        )
        return result

    def list_posts(self) -> List[PostSummary]:
        posts = self.load().posts
        ordered = sort_posts(posts)
        return [posts[slug].summary(slug) for slug in ordered]

    def get_post(self, slug: str) -> Optional[Post]:
        path = self.repo.get_path(slug)
        if path is None:
            return None
        return self.parser(self._read(path, slug), identifier=slug)

    def _read(self, path, identifier: str) -> str:
        try:
            return self.repo.read(path)
        except (OSError, UnicodeDecodeError) as e:
            raise UnreadablePost(f"cannot read {path}: {e}", identifier) from e


def sort_posts(posts: Dict[str, Post]) -> List[str]:
    """Identifiers ordered newest first; equal dates fall back to identifier order."""
    by_slug = sorted(posts)
    return sorted(by_slug, key=lambda slug: posts[slug].date, reverse=True)
