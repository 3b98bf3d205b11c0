class EngineError(Exception):
    pass


class LLMError(EngineError):
    pass


class ParseError(EngineError):
    pass
