from typing import Optional


class PostError(ValueError):
    """Base class for every problem found while turning a source file into a Post."""

    def __init__(self, detail: str, identifier: Optional[str] = None):
        self.detail = detail
        self.identifier = identifier
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.identifier:
            return f"{self.identifier}: {self.detail}"
        return self.detail

    def with_identifier(self, identifier: Optional[str]) -> "PostError":
        self.identifier = identifier
        self.args = (str(self),)
        return self


class MalformedHeader(PostError):
    pass


class FieldError(PostError):
    def __init__(self, field: str, detail: str, identifier: Optional[str] = None):
        self.field = field
        super().__init__(detail, identifier)


class MissingField(FieldError):
    def __init__(self, field: str, identifier: Optional[str] = None):
        super().__init__(field, f"missing required field '{field}'", identifier)


class InvalidField(FieldError):
    pass


class UnknownField(FieldError):
    def __init__(self, field: str, identifier: Optional[str] = None):
        super().__init__(field, f"unknown header field '{field}'", identifier)


class MalformedDate(FieldError):
    def __init__(self, detail: str, identifier: Optional[str] = None):
        super().__init__("date", detail, identifier)


class MalformedTags(FieldError):
    def __init__(self, detail: str, identifier: Optional[str] = None):
        super().__init__("tags", detail, identifier)


class UnreadablePost(PostError):
    pass


class DuplicateIdentifier(PostError):
    pass
