class SlidezError(Exception):
    pass


class MissingInputFileError(SlidezError):
    def __init__(self, path: object, what: str = "input file") -> None:
        super().__init__(f"could not find {what} {path}")
        self.path = path


class TemplateNotFoundError(MissingInputFileError):
    def __init__(self, path: object) -> None:
        super().__init__(path, "template")


class RendererError(SlidezError):
    pass


class AssetNotFoundError(RendererError):
    def __init__(self, path: object) -> None:
        super().__init__(f"could not find asset {path}")
        self.path = path


class SettingsError(SlidezError):
    pass
