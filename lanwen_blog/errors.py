class BlogError(Exception):
    """Base class for everything the build reports as a failure."""


class ConfigError(BlogError):
    pass


class ContentError(BlogError):
    pass


class MalformedFilenameError(ContentError):
    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class DuplicateSlugError(ContentError):
    def __init__(self, slug, first, second):
        self.slug = slug
        super().__init__(f"slug {slug} is produced by both {first} and {second}")
