"""Tests for thread safety of Container."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from phiwire.container import Container
from phiwire.lock_mode import LockMode
from tests.stubs import A, B


class SlowService:
    instances = 0
    lock = threading.Lock()

    def __init__(self) -> None:
        time.sleep(0.01)
        with SlowService.lock:
            SlowService.instances += 1


class TestConcurrentResolution:
    def test_concurrent_singleton_first_access_realizes_once(self) -> None:
        container = Container()
        container.singleton("slow", SlowService)
        SlowService.instances = 0
        barrier = threading.Barrier(10)
        results: list[SlowService] = []
        errors: list[Exception] = []

        def resolve_service() -> None:
            barrier.wait()
            try:
                results.append(container.make("slow"))
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=resolve_service) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(results) == 10
        assert all(r is results[0] for r in results)
        assert SlowService.instances == 1

    def test_concurrent_transient_resolution_different_instances(
        self,
        container: Container,
    ) -> None:
        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: container.make(B), range(20)))

        assert len({id(r) for r in results}) == 20
        assert all(isinstance(r.a, A) for r in results)

    def test_factory_may_wait_on_another_thread_resolving(self, container: Container) -> None:
        container.singleton("dependency", A)

        def factory() -> B:
            results: list[A] = []
            worker = threading.Thread(
                target=lambda: results.append(container.make("dependency")),
                daemon=True,
            )
            worker.start()
            worker.join(timeout=5)
            assert not worker.is_alive()
            return B(results[0])

        container.singleton("service", factory)

        service = container.make("service")

        assert service.a is container.make("dependency")


class TestConcurrentRegistration:
    def test_concurrent_registration_no_corruption(self) -> None:
        container = Container()

        def register(index: int) -> None:
            container.bind(f"alias.{index}", A)
            container.singleton(f"singleton.{index}", A)

        with ThreadPoolExecutor(max_workers=8) as executor:
            list(executor.map(register, range(50)))

        for index in range(50):
            assert isinstance(container.make(f"alias.{index}"), A)
            assert container.make(f"singleton.{index}") is container.make(f"singleton.{index}")


class TestUnlockedContainer:
    def test_unlocked_container_resolves(self, unlocked_container: Container) -> None:
        unlocked_container.singleton("one", A)

        assert unlocked_container.make("one") is unlocked_container.make("one")
