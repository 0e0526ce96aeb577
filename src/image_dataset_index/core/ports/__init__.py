
from .image_tree import ImageTreePort
from .index_cache_store import IndexCacheStorePort
from .progress_sink import ProgressSinkPort
from .superclass_source import SuperclassSourcePort

__all__ = [
	"ImageTreePort",
	"IndexCacheStorePort",
	"ProgressSinkPort",
	"SuperclassSourcePort",
]
