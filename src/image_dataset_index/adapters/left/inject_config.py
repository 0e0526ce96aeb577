from __future__ import annotations

from typing import Optional

import inject

from image_dataset_index.core.ports.image_tree import ImageTreePort
from image_dataset_index.core.ports.index_cache_store import IndexCacheStorePort
from image_dataset_index.core.ports.progress_sink import ProgressSinkPort
from image_dataset_index.core.ports.superclass_source import SuperclassSourcePort
from image_dataset_index.core.use_cases.build_index import \
    BuildDatasetIndexUseCase


# pylint: disable=invalid-name
def get_dependencies_injection_config(
    *,
    image_tree: ImageTreePort,
    superclass_source: SuperclassSourcePort,
    cache_store: IndexCacheStorePort,
    progress_sink: Optional[ProgressSinkPort] = None,
):
    """Return an inject binder function.

    No imports occur inside the returned function.
    """

    def configure_dependencies_injection(binder: inject.Binder) -> None:
        binder.bind(ImageTreePort, image_tree)
        binder.bind(SuperclassSourcePort, superclass_source)
        binder.bind(IndexCacheStorePort, cache_store)
        if progress_sink is not None:
            binder.bind(ProgressSinkPort, progress_sink)

        # Bind the use case as a fully-wired object.
        binder.bind(
            BuildDatasetIndexUseCase,
            BuildDatasetIndexUseCase(
                image_tree=image_tree,
                superclass_source=superclass_source,
                cache_store=cache_store,
                progress_sink=progress_sink,
            ),
        )

    return configure_dependencies_injection


def configure_injections(
    *,
    image_tree: ImageTreePort,
    superclass_source: SuperclassSourcePort,
    cache_store: IndexCacheStorePort,
    progress_sink: Optional[ProgressSinkPort] = None,
) -> None:
    """Configure inject with this app's runtime bindings.

    Safe to call multiple times (clears previous bindings).
    """

    config = get_dependencies_injection_config(
        image_tree=image_tree,
        superclass_source=superclass_source,
        cache_store=cache_store,
        progress_sink=progress_sink,
    )

    if inject.is_configured():
        inject.clear_and_configure(config)
    else:
        inject.configure(config)
