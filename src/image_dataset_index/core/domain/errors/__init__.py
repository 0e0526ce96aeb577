
from .indexing import *
