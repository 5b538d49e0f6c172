"""Tests for the metrics registry"""
import pytest

from metrics import Counter, Descriptor, Family, Gauge, MetricHandle, Registry, Unit


class TestRegistry:
    """Test registration and iteration order"""

    def setup_method(self):
        """Setup test fixtures"""
        self.registry = Registry()

    def test_register(self):
        """Test a registered metric is yielded with its descriptor"""
        counter = Counter()
        self.registry.register("requests", "Requests served", counter)

        entries = list(self.registry.iter())

        assert entries == [(Descriptor("requests", "Requests served", None, ()), counter)]

    def test_register_with_unit(self):
        """Test units are kept on the descriptor"""
        self.registry.register_with_unit("latency", "Latency", Unit.SECONDS, Gauge())
        self.registry.register_with_unit("queue", "Queue depth", "messages", Gauge())

        units = [descriptor.unit for descriptor, _ in self.registry]

        assert units == [Unit.SECONDS, "messages"]

    def test_help_kept_verbatim(self):
        """Test help text is not altered"""
        self.registry.register("jobs", "Jobs processed", Counter())

        descriptor, _ = next(self.registry.iter())

        assert descriptor.help == "Jobs processed"

    def test_registration_order(self):
        """Test metrics are yielded in registration order"""
        for name in ("d1", "d2", "d3"):
            self.registry.register(name, name, Counter())

        assert [descriptor.name for descriptor, _ in self.registry] == ["d1", "d2", "d3"]

    def test_rejects_non_metrics(self):
        """Test only metrics can be registered"""
        with pytest.raises(ValueError):
            self.registry.register("bad", "Not a metric", 42)

    def test_accepts_handles(self):
        """Test type-erased handles register like metrics"""
        handle = MetricHandle(Counter())
        self.registry.register("wrapped", "Wrapped counter", handle)

        _, metric = next(self.registry.iter())

        assert metric is handle

    def test_duplicates_pass_through(self):
        """Test duplicate names are not rejected"""
        self.registry.register("dup", "First", Counter())
        self.registry.register("dup", "Second", Counter())

        assert [descriptor.help for descriptor, _ in self.registry] == ["First", "Second"]

    def test_descriptor_immutable(self):
        """Test descriptors cannot be modified"""
        self.registry.register("requests", "Requests", Counter())
        descriptor, _ = next(self.registry.iter())

        with pytest.raises(AttributeError):
            descriptor.name = "other"


class TestSubRegistries:
    """Test prefix and label inheritance"""

    def test_prefix(self):
        """Test sub-registry prefixes compose"""
        registry = Registry(prefix="app")
        http = registry.sub_registry_with_prefix("http")
        http.sub_registry_with_prefix("server").register("requests", "Requests", Counter())

        descriptor, _ = next(registry.iter())

        assert descriptor.name == "app_http_server_requests"

    def test_prefix_from_unprefixed_root(self):
        """Test a sub-registry of an unprefixed root"""
        registry = Registry()
        registry.sub_registry_with_prefix("http").register("requests", "Requests", Counter())

        assert next(registry.iter())[0].name == "http_requests"

    def test_labels_accumulate(self):
        """Test static labels accumulate root first"""
        registry = Registry(labels=[("service", "api")])
        child = registry.sub_registry_with_label(("region", "eu"))
        child.sub_registry_with_label(("zone", "a")).register("requests", "Requests", Counter())

        descriptor, _ = next(registry.iter())

        assert descriptor.labels == (("service", "api"), ("region", "eu"), ("zone", "a"))

    def test_mapping_labels(self):
        """Test constant labels given as a mapping"""
        registry = Registry(labels={"service": "api", "env": "prod"})
        registry.register("requests", "Requests", Counter())

        descriptor, _ = next(registry.iter())

        assert descriptor.labels == (("service", "api"), ("env", "prod"))

    def test_single_pair_labels(self):
        """Test a single bare pair is one label, not two"""
        registry = Registry(labels=("service", "api"))
        child = registry.sub_registry_with_label({"region": "eu"})
        child.register("requests", "Requests", Counter())

        descriptor, _ = next(registry.iter())

        assert descriptor.labels == (("service", "api"), ("region", "eu"))

    def test_prefix_keeps_labels(self):
        """Test prefixing a labelled registry keeps its labels"""
        registry = Registry().sub_registry_with_label(("region", "eu"))
        registry.sub_registry_with_prefix("db").register("queries", "Queries", Counter())

        descriptor, _ = next(registry.iter())

        assert descriptor.name == "db_queries"
        assert descriptor.labels == (("region", "eu"),)

    def test_iteration_depth_first(self):
        """Test own metrics come before sub-registries, which keep creation order"""
        registry = Registry()
        registry.register("a", "a", Counter())
        first = registry.sub_registry_with_prefix("first")
        second = registry.sub_registry_with_prefix("second")
        second.register("b", "b", Counter())
        first.register("c", "c", Family(Counter))
        first.sub_registry_with_label(("k", "v")).register("d", "d", Counter())
        registry.register("e", "e", Counter())

        names = [descriptor.name for descriptor, _ in registry]

        assert names == ["a", "e", "first_c", "first_d", "second_b"]
