from poissongrid.analysis.assembler import Assembler, assemble
from poissongrid.analysis.classifier import OUTSIDE, InclusionClassifier
from poissongrid.analysis.system import LinearSystem

__all__ = [
    "Assembler",
    "InclusionClassifier",
    "LinearSystem",
    "OUTSIDE",
    "assemble",
]
