from .batch import BatchError, BatchResult, evaluate_batch
from .composer import compose
from .policy import is_window_allowed
from .rules import evaluate
from .suppressor import should_emit
