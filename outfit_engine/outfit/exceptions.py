from outfit_engine.core.exceptions import EngineError


class OutfitValidationError(EngineError):
    def __init__(self: "OutfitValidationError", errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(", ".join(self.errors))
