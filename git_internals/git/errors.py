class GitError(Exception):
    """Base class for failures reading the object database."""


class UnexpectedEndOfStream(GitError):
    pass


class MalformedHeader(GitError):
    pass


class UnrecognizedObjectType(GitError):
    pass


class TruncatedEntry(GitError):
    pass


class MissingTreeField(GitError):
    pass


class SecondParentWithoutFirst(GitError):
    pass


class MalformedAuthorLine(GitError):
    pass


class MalformedHash(GitError):
    pass


class ExpectedTreeGotOther(GitError):
    pass


class UnexpectedObjectKind(GitError):
    pass


class ObjectNotFound(GitError):
    pass


class ReferenceNotFound(GitError):
    pass
