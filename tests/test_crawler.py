"""Tests for the dependency crawler."""

import logging

import pytest

from fundamental.crawler import CrawlState, DependencyCrawler
from fundamental.models import CrawlStrategy


class TestCrawlState:
    def test_root_is_pending(self):
        state = CrawlState("alpha")
        assert state.pending == {"alpha"}
        assert list(state.frontier) == [("alpha", 0)]
        assert bool(state) is True

    def test_enqueue_skips_pending(self):
        state = CrawlState("alpha")
        assert state.enqueue("alpha", 3) is False
        assert list(state.frontier) == [("alpha", 0)]

    def test_enqueue_skips_resolved(self):
        state = CrawlState("alpha")
        state.pop(CrawlStrategy.lifo)
        state.record("alpha", None, 0)
        assert state.enqueue("alpha", 1) is False
        assert not state

    def test_pop_lifo_takes_newest(self):
        state = CrawlState("alpha")
        state.enqueue("beta", 1)
        assert state.pop(CrawlStrategy.lifo) == ("beta", 1)
        assert "beta" not in state.pending

    def test_pop_fifo_takes_oldest(self):
        state = CrawlState("alpha")
        state.enqueue("beta", 1)
        assert state.pop(CrawlStrategy.fifo) == ("alpha", 0)

    def test_record_keeps_first_depth(self):
        state = CrawlState("alpha")
        first = state.record("beta", "https://github.com/acme/beta", 3)
        again = state.record("beta", "https://github.com/acme/beta", 1)
        assert again is first
        assert state.packages["beta"].depth == 3

    def test_record_assigns_sequence(self):
        state = CrawlState("alpha")
        a = state.record("alpha", None, 0)
        b = state.record("beta", None, 1)
        assert (a.sequence, b.sequence) == (0, 1)

    def test_record_clears_previous_failure(self):
        state = CrawlState("alpha")
        state.failures["beta"] = "boom"
        state.record("beta", None, 1)
        assert "beta" not in state.failures


class TestDependencyCrawler:
    @pytest.mark.asyncio
    async def test_excludes_dev_dependencies(self, fake_registry_cls):
        registry = fake_registry_cls(
            {
                "alpha": ["beta", ("gamma", "dev")],
                "beta": [],
                "gamma": [],
            }
        )
        state = await DependencyCrawler(registry, max_depth=1).crawl("alpha")

        assert {n: p.depth for n, p in state.packages.items()} == {
            "alpha": 0,
            "beta": 1,
        }
        assert "gamma" not in registry.calls

    @pytest.mark.asyncio
    async def test_includes_dev_dependencies_when_asked(self, fake_registry_cls):
        registry = fake_registry_cls(
            {"alpha": ["beta", ("gamma", "dev")], "beta": [], "gamma": []}
        )
        state = await DependencyCrawler(registry, include_dev=True).crawl("alpha")
        assert set(state.packages) == {"alpha", "beta", "gamma"}

    @pytest.mark.asyncio
    async def test_build_dependencies_are_followed(self, fake_registry_cls):
        registry = fake_registry_cls({"alpha": [("cc", "build")], "cc": []})
        state = await DependencyCrawler(registry).crawl("alpha")
        assert "cc" in state.packages

    @pytest.mark.asyncio
    async def test_cycle_terminates(self, fake_registry_cls):
        registry = fake_registry_cls({"a": ["b"], "b": ["a"]})
        state = await DependencyCrawler(registry).crawl("a")

        assert set(state.packages) == {"a", "b"}
        assert registry.calls.count("a") == 1
        assert registry.calls.count("b") == 1

    @pytest.mark.asyncio
    async def test_diamond_fetches_shared_child_once(self, fake_registry_cls):
        registry = fake_registry_cls(
            {"root": ["left", "right"], "left": ["base"], "right": ["base"], "base": []}
        )
        state = await DependencyCrawler(registry).crawl("root")

        assert set(state.packages) == {"root", "left", "right", "base"}
        assert registry.calls.count("base") == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("max_depth", [0, 1, 2, 3])
    async def test_never_deeper_than_max_depth(self, fake_registry_cls, max_depth):
        registry = fake_registry_cls(
            {"d0": ["d1"], "d1": ["d2"], "d2": ["d3"], "d3": ["d4"], "d4": []}
        )
        state = await DependencyCrawler(registry, max_depth=max_depth).crawl("d0")

        assert len(state.packages) == max_depth + 1
        assert max(p.depth for p in state.packages.values()) == max_depth

    @pytest.mark.asyncio
    async def test_lifo_processes_last_declared_first(self, fake_registry_cls):
        registry = fake_registry_cls({"root": ["first", "second"], "first": [], "second": []})
        await DependencyCrawler(registry).crawl("root")
        assert registry.calls == ["root", "second", "first"]

    @pytest.mark.asyncio
    async def test_fifo_gives_shortest_depth(self, fake_registry_cls):
        # "shared" is reachable at depth 1 directly and depth 2 via "via"
        registry = fake_registry_cls(
            {"root": ["shared", "via"], "via": ["shared"], "shared": []}
        )
        state = await DependencyCrawler(
            registry, strategy=CrawlStrategy.fifo
        ).crawl("root")
        assert state.packages["shared"].depth == 1

    @pytest.mark.asyncio
    async def test_lifo_keeps_first_discovered_depth(self, fake_registry_cls):
        # LIFO walks other -> deep -> shared (depth 3) before via is popped
        registry = fake_registry_cls(
            {"root": ["via", "other"], "other": ["deep"], "deep": ["shared"],
             "via": ["shared"], "shared": []}
        )
        state = await DependencyCrawler(registry).crawl("root")
        assert state.packages["shared"].depth == 3
        assert registry.calls.count("shared") == 1

    @pytest.mark.asyncio
    async def test_failed_fetch_is_skipped(self, fake_registry_cls, caplog):
        registry = fake_registry_cls(
            {"alpha": ["broken", "beta"], "beta": [], "broken": ["never"]},
            failing={"broken"},
        )
        with caplog.at_level(logging.ERROR, logger="fundamental"):
            state = await DependencyCrawler(registry).crawl("alpha")

        assert set(state.packages) == {"alpha", "beta"}
        assert "broken" in state.failures
        assert "never" not in registry.calls
        assert "Error on broken" in caplog.text

    @pytest.mark.asyncio
    async def test_failed_package_is_retried_from_another_parent(self, fake_registry_cls):
        registry = fake_registry_cls(
            {"root": ["a", "b"], "a": ["shared"], "b": ["shared"], "shared": []},
            fail_once={"shared"},
        )
        state = await DependencyCrawler(registry).crawl("root")

        assert "shared" in state.packages
        assert "shared" not in state.failures
        assert registry.calls.count("shared") == 2

    @pytest.mark.asyncio
    async def test_root_failure_yields_empty_map(self, fake_registry_cls):
        registry = fake_registry_cls({}, failing={"ghost"})
        state = await DependencyCrawler(registry).crawl("ghost")
        assert state.packages == {}
        assert list(state.failures) == ["ghost"]

    @pytest.mark.asyncio
    async def test_records_repository(self, fake_registry_cls):
        registry = fake_registry_cls(
            {"alpha": []}, repos={"alpha": "https://github.com/acme/alpha"}
        )
        state = await DependencyCrawler(registry).crawl("alpha")
        assert state.packages["alpha"].repository == "https://github.com/acme/alpha"

    @pytest.mark.asyncio
    async def test_status_callback(self, fake_registry_cls):
        messages = []
        registry = fake_registry_cls({"alpha": []})
        await DependencyCrawler(registry, on_status=messages.append).crawl("alpha")
        assert messages == ["Crawling alpha (depth 0) …"]
