import logging
from pathlib import Path
from typing import Iterable, List, Optional

from blogcorpus.settings import settings

logger = logging.getLogger(__name__)


class FilePostsRepo:
    def __init__(
        self,
        root: Path | str | None = None,
        extensions: Iterable[str] | None = None,
    ):
        self.root = Path(root) if root is not None else settings.content_path
        self.extensions = tuple(
            ext.lower() for ext in (extensions or settings.POST_EXTENSIONS)
        )

    def list_post_paths(self) -> List[Path]:
        if not self.root.is_dir():
            logger.warning(f"Content directory {self.root} does not exist")
            return []

        paths = [path for path in self.root.rglob("*") if self._is_post_file(path)]
        return sorted(paths, key=lambda p: p.relative_to(self.root).as_posix())

    def read(self, path: Path) -> str:
        return Path(path).read_text(encoding="utf-8")

    def identifier_for(self, path: Path) -> str:
        relative = Path(path).relative_to(self.root)
        return relative.with_suffix("").as_posix()

    def get_path(self, slug: str) -> Optional[Path]:
        for path in self.list_post_paths():
            if self.identifier_for(path) == slug:
                return path
        return None

    def _is_post_file(self, path: Path) -> bool:
        if not path.is_file() or path.suffix.lower() not in self.extensions:
            return False
        try:
            relative = path.resolve().relative_to(self.root.resolve())
        except ValueError:
            # symlink leading outside the content directory
            return False
        return not any(part.startswith(".") for part in relative.parts)
