import threading

import pytest

from radiance.deserializer import Deserializer, get_optional_value
from radiance.resource import GlobalResource, Resource, get_global_resource
from radiance.resource_unit import ResourceBase, ResourceUnit


class Counter(ResourceBase):
    resource_type = "counter"

    def __init__(self, main_only=False, action=None):
        self.main_only = main_only
        self.action = action
        self.loads = 0
        self.threads = []

    def load(self):
        self.loads += 1
        self.threads.append(threading.current_thread())
        if self.action is not None:
            self.action()


class Other(ResourceBase):
    resource_type = "other"

    def load(self):
        pass


class CounterDeserializer(Deserializer):
    resource_type = "counter"

    def __init__(self, action=None):
        self.action = action

    def deserialize(self, resource_id, header_table):
        section = header_table[resource_id]
        main = get_optional_value(section, "main", bool, False)
        return ResourceUnit(resource_id, Counter(main, self.action), self.resource_type)


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_loads_each_resource(tmp_path):
    path = _write(tmp_path / "r.toml", '[alpha]\ntype = "counter"\n\n[beta]\ntype = "counter"\n')
    res = Resource()
    res.add_deserializer(CounterDeserializer())
    res.load_resources(path)
    assert sorted(res.get_resource_ids()) == ["alpha", "beta"]
    assert res.get_resource("alpha").data.loads == 1
    assert res.get_resource("beta").data.loads == 1


def test_main_only_loads_on_calling_thread(tmp_path):
    path = _write(tmp_path / "r.toml", '[gl]\ntype = "counter"\nmain = true\n')
    res = Resource()
    res.add_deserializer(CounterDeserializer())
    res.load_resources(path)
    assert res.get_resource("gl").data.threads == [threading.current_thread()]


def test_include_loads_dependencies(tmp_path):
    _write(tmp_path / "sub.toml", '[beta]\ntype = "counter"\n')
    path = _write(
        tmp_path / "main.toml",
        '[include]\ndependencies = ["sub"]\n\n[alpha]\ntype = "counter"\n',
    )
    res = Resource()
    res.add_deserializer(CounterDeserializer())
    res.load_resources(path)
    assert sorted(res.get_resource_ids()) == ["alpha", "beta"]
    assert res.get_resource("beta").data.loads >= 1


def test_include_without_dependencies(tmp_path):
    path = _write(tmp_path / "r.toml", "[include]\nother = 1\n")
    res = Resource()
    res.add_deserializer(CounterDeserializer())
    with pytest.raises(ValueError, match="does not declare dependencies"):
        res.load_resources(path)


def test_include_dependency_not_string(tmp_path):
    path = _write(tmp_path / "r.toml", "[include]\ndependencies = [3]\n")
    res = Resource()
    res.add_deserializer(CounterDeserializer())
    with pytest.raises(ValueError, match="dependency not found"):
        res.load_resources(path)


def test_missing_type(tmp_path):
    path = _write(tmp_path / "r.toml", "[alpha]\npath = \"x\"\n")
    res = Resource()
    res.add_deserializer(CounterDeserializer())
    with pytest.raises(ValueError, match="does not declare a type"):
        res.load_resources(path)


def test_unknown_deserializer(tmp_path):
    path = _write(tmp_path / "r.toml", '[alpha]\ntype = "mystery"\n')
    res = Resource()
    res.add_deserializer(CounterDeserializer())
    with pytest.raises(ValueError, match="does not have a deserializer with type: mystery"):
        res.load_resources(path)


def test_duplicate_across_include(tmp_path):
    _write(tmp_path / "sub.toml", '[alpha]\ntype = "counter"\n')
    path = _write(
        tmp_path / "main.toml",
        '[include]\ndependencies = ["sub.toml"]\n\n[alpha]\ntype = "counter"\n',
    )
    res = Resource()
    res.add_deserializer(CounterDeserializer())
    with pytest.raises(ValueError, match="Resource alpha already exists."):
        res.load_resources(path)


def test_missing_file(tmp_path):
    res = Resource()
    res.add_deserializer(CounterDeserializer())
    with pytest.raises(OSError, match="Failed to open resource headers file"):
        res.load_resources(str(tmp_path / "absent.toml"))


def test_bad_toml(tmp_path):
    path = _write(tmp_path / "r.toml", "[alpha\n")
    res = Resource()
    res.add_deserializer(CounterDeserializer())
    with pytest.raises(ValueError, match="Failed to parse resource headers file"):
        res.load_resources(path)


def test_load_error_propagates(tmp_path):
    def fail():
        raise RuntimeError("boom")

    path = _write(tmp_path / "r.toml", '[alpha]\ntype = "counter"\n')
    res = Resource()
    res.add_deserializer(CounterDeserializer(fail))
    with pytest.raises(RuntimeError, match="boom"):
        res.load_resources(path)


def test_get_resource_missing_is_none():
    assert Resource().get_resource("nothing") is None
    assert Resource().get_resource_as("nothing", Counter) is None


def test_get_resource_as(tmp_path):
    path = _write(tmp_path / "r.toml", '[alpha]\ntype = "counter"\n')
    res = Resource()
    res.add_deserializer(CounterDeserializer())
    res.load_resources(path)
    data = res.get_resource_as("alpha", Counter)
    assert data is res.get_resource("alpha").data
    with pytest.raises(TypeError, match="Resource alpha is not of type other."):
        res.get_resource_as("alpha", Other)


def test_clear_resources(tmp_path):
    path = _write(tmp_path / "r.toml", '[alpha]\ntype = "counter"\n')
    res = Resource()
    res.add_deserializer(CounterDeserializer())
    res.load_resources(path)
    res.clear_resources()
    assert res.get_resource_ids() == []


def test_global_and_ordinary_resources(tmp_path):
    glob = _write(tmp_path / "g.toml", '[shared]\ntype = "counter"\n')
    local = _write(tmp_path / "l.toml", '[level]\ntype = "counter"\n\n[alpha]\ntype = "counter"\n')
    res = GlobalResource()
    res.add_deserializer(CounterDeserializer())
    res.load_global_resources(glob)
    res.load_resources(local)
    assert res.get_resource_ids() == ["alpha", "level", "shared"]
    assert res.get_resource("level") is not None and res.get_resource("shared") is not None

    res.clear_resources()
    assert res.get_resource_ids() == ["shared"]
    assert res.get_resource("level") is None

    res.clear_all_resources()
    assert res.get_resource_ids() == []


def test_global_clear_while_loading(tmp_path):
    res = GlobalResource()

    def clear():
        res.clear_resources()

    res.add_deserializer(CounterDeserializer(clear))
    path = _write(tmp_path / "r.toml", '[alpha]\ntype = "counter"\nmain = true\n')
    with pytest.raises(RuntimeError, match="Cannot clear resources while loading resources."):
        res.load_resources(path)
    assert res.is_loading is False


def test_global_singleton_is_shared():
    first = get_global_resource()
    assert first is get_global_resource()
    assert isinstance(first, GlobalResource)