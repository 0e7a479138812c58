from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from predychain.chain import Chain
from predychain.manifest.base import ChainManifest, SchemaRuleSpec
from predychain.register import GlobalRegistryManager
from predychain.register.errs import RegistryNotFoundError

if TYPE_CHECKING:
    from predychain.register import Registry, RegistryManager

logger = logging.getLogger(__name__)


class ChainLoader:
    """
    Builds chains from [ChainManifest][predychain.manifest.base.ChainManifest] declarations.

    Registries are looked up by name through ``registry_manager``; the chain is then built
    with the same builder calls a caller would make by hand, so a loaded chain behaves
    exactly like its fluent equivalent.

    Attributes:
        registry_manager (RegistryManager): Where registry names are resolved.
    """

    def __init__(self, registry_manager: RegistryManager | None = None):
        self.registry_manager = registry_manager or GlobalRegistryManager

    def load(self, manifest: ChainManifest | Mapping[str, Any] | str | bytes) -> Chain:
        """
        Build a chain from a manifest, a mapping, or a JSON document.

        Raises:
            pydantic.ValidationError: If the declaration is malformed.
            RegistryNotFoundError: If a registry name is unknown.
            RuleNotFoundError: If a rule name is unknown to its registry.
        """
        if isinstance(manifest, (str, bytes)):
            manifest = ChainManifest.model_validate_json(manifest)
        elif not isinstance(manifest, ChainManifest):
            manifest = ChainManifest.model_validate(manifest)

        return self._build(manifest, None)

    def _registry_for(self, manifest: ChainManifest, parent: Registry | None) -> Registry:
        if parent is not None and "registry" not in manifest.model_fields_set:
            return parent
        registry = self.registry_manager.get_register(manifest.registry)
        if registry is None:
            raise RegistryNotFoundError(manifest.registry)
        return registry

    def _build(self, manifest: ChainManifest, parent: Registry | None) -> Chain:
        registry = self._registry_for(manifest, parent)
        built = Chain(registry)

        for spec in manifest.rules:
            for modifier in spec.modifiers:
                built = built.with_pending_modifier(modifier)

            if isinstance(spec, SchemaRuleSpec):
                nested = {key: self._build(sub, registry) for key, sub in spec.properties.items()}
                built = built.with_rule(spec.name, nested)
            else:
                built = built.with_rule(spec.name, *spec.args)

        logger.debug("Loaded chain %r from registry %r", built, registry.name)
        return built
