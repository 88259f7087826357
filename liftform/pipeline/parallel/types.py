# liftform/pipeline/parallel/types.py
from enum import Enum


class ParallelKind(str, Enum):
    FOLD = "fold"
