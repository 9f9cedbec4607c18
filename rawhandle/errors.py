class NullHandleError(RuntimeError):
    pass


class HandleCopyError(TypeError):
    def __init__(self, cls: type):
        super().__init__(f"{cls.__name__} cannot be copied, use take() to transfer ownership")
