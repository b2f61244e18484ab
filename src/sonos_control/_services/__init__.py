from ._dispatcher import Dispatcher, FailureCallback, SuccessCallback

__all__ = ["Dispatcher", "FailureCallback", "SuccessCallback"]
