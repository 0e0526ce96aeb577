
from .cache_npz import NpzIndexCacheStore
from .cache_safetensors import SafetensorsIndexCacheStore
from .filesystem_image_tree import FilesystemImageTree
from .superclass_text import WhitespaceSuperclassFile

__all__ = [
	"FilesystemImageTree",
	"NpzIndexCacheStore",
	"SafetensorsIndexCacheStore",
	"WhitespaceSuperclassFile",
]
