"""Resource registries loaded from TOML header files."""

from __future__ import annotations

import os
import threading
import tomllib
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar

from radiance.deserializer import Deserializer
from radiance.resource_unit import ResourceBase, ResourceUnit
from radiance.utils import get_directory, remove_quotes

R = TypeVar("R", bound=ResourceBase)


class Resource:
    """Loads resources described in TOML header files and keeps them by id."""

    def __init__(self) -> None:
        self.resources: dict[str, ResourceUnit] = {}
        self.deserializers: dict[str, Deserializer] = {}

    def load_resources(self, headers_path: str) -> None:
        """Read the header file at ``headers_path`` (and its includes) and load all resources."""
        self._load_headers(headers_path)

    def clear_resources(self) -> None:
        """Forget all loaded resources."""
        self.resources.clear()

    def get_resource(self, resource_id: str) -> ResourceUnit | None:
        """Return the unit registered under ``resource_id``, or ``None``."""
        return self.resources.get(resource_id)

    def get_resource_as(self, resource_id: str, expected_type: type[R]) -> R | None:
        """Return the data of ``resource_id`` if it is of ``expected_type``'s kind.

        Returns ``None`` if there is no such resource and raises ``TypeError``
        if the resource's declared type differs.
        """
        unit = self.get_resource(resource_id)
        if unit is None:
            return None
        if expected_type.resource_type != unit.resource_type:
            raise TypeError(
                f"Resource {resource_id} is not of type {expected_type.resource_type}."
            )
        return unit.data

    def add_deserializer(self, deserializer: Deserializer) -> None:
        """Register ``deserializer`` for its resource type, replacing any previous one."""
        self.deserializers[deserializer.resource_type] = deserializer

    def get_resource_ids(self) -> list[str]:
        """Return the ids of all loaded resources."""
        return list(self.resources)

    def _read_headers(self, headers_path: str) -> dict[str, Any]:
        try:
            with open(headers_path, "rb") as headers:
                raw = headers.read()
        except OSError as exc:
            raise OSError(f"Failed to open resource headers file {headers_path}") from exc
        try:
            return tomllib.loads(raw.decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise ValueError(
                f"Failed to parse resource headers file {headers_path}:\n{exc}"
            ) from exc

    def _load_includes(self, headers_path: str, section: dict[str, Any]) -> None:
        dependencies = section.get("dependencies")
        if not isinstance(dependencies, list):
            raise ValueError("Resource include does not declare dependencies.")
        directory = get_directory(headers_path)
        for dependency in dependencies:
            if not isinstance(dependency, str):
                raise ValueError("Resource include dependency not found")
            path = f"{directory}/{remove_quotes(dependency)}"
            if not path.endswith(".toml"):
                path += ".toml"
            self._load_headers(path)

    def _load_headers(self, headers_path: str) -> None:
        table = self._read_headers(headers_path)
        for key, raw_section in table.items():
            section = raw_section if isinstance(raw_section, dict) else {}
            resource_id = remove_quotes(key)
            if resource_id in self.resources:
                raise ValueError(f"Resource {resource_id} already exists.")
            if resource_id == "include":
                self._load_includes(headers_path, section)
                continue
            resource_type = section.get("type")
            if not isinstance(resource_type, str):
                raise ValueError(f"Resource {resource_id} does not declare a type.")
            deserializer = self.deserializers.get(resource_type)
            if deserializer is None:
                raise ValueError(
                    f"Resource {resource_id} does not have a deserializer with type: {resource_type}"
                )
            self.resources[resource_id] = deserializer.deserialize(key, table)
        self._dispatch_load()

    def _dispatch_load(self) -> None:
        background: list[ResourceUnit] = []
        main: list[ResourceUnit] = []
        for unit in self.resources.values():
            (main if unit.data.main_only else background).append(unit)
        workers = max(1, (os.cpu_count() or 2) - 1)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(unit.data.load) for unit in background]
            for unit in main:
                unit.data.load()
            for future in futures:
                future.result()


class GlobalResource(Resource):
    """Resources shared by everything, kept apart from a clearable set of ordinary ones.

    Resources loaded with ``load_global_resources`` survive ``clear_resources``;
    those loaded with ``load_resources`` do not.
    """

    GLOBAL_RES_HEADERS_PATH = "global_resources.toml"

    def __init__(self) -> None:
        super().__init__()
        self.sub_resource = Resource()
        self.is_loading = False

    def load_resources(self, headers_path: str) -> None:
        self.is_loading = True
        try:
            self.sub_resource.load_resources(headers_path)
        finally:
            self.is_loading = False

    def load_global_resources(self, headers_path: str) -> None:
        """Load resources that stay until ``clear_all_resources``."""
        self.is_loading = True
        try:
            super().load_resources(headers_path)
        finally:
            self.is_loading = False

    def _check_not_loading(self) -> None:
        if self.is_loading:
            raise RuntimeError("Cannot clear resources while loading resources.")

    def clear_resources(self) -> None:
        """Forget the ordinary resources, keeping the global ones."""
        self._check_not_loading()
        self.sub_resource.clear_resources()

    def clear_all_resources(self) -> None:
        """Forget the ordinary and the global resources."""
        self._check_not_loading()
        self.sub_resource.clear_resources()
        self.resources.clear()

    def get_resource(self, resource_id: str) -> ResourceUnit | None:
        unit = self.resources.get(resource_id)
        if unit is not None:
            return unit
        return self.sub_resource.get_resource(resource_id)

    def add_deserializer(self, deserializer: Deserializer) -> None:
        super().add_deserializer(deserializer)
        self.sub_resource.add_deserializer(deserializer)

    def get_resource_ids(self) -> list[str]:
        """Return the ids of global and ordinary resources, sorted."""
        return sorted(self.sub_resource.get_resource_ids() + list(self.resources))


_global: GlobalResource | None = None
_global_lock = threading.Lock()


def get_global_resource() -> GlobalResource:
    """Return the process-wide ``GlobalResource``."""
    global _global
    if _global is None:
        with _global_lock:
            if _global is None:
                _global = GlobalResource()
    return _global