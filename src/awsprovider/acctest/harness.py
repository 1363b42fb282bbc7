"""
Offline acceptance-test runner.

Each config step decodes the HCL configuration, validates every block against
the provider owning its type prefix and builds the planned state: the
flattened configuration plus every unset computed attribute as unknown.
Nothing is created in AWS.
"""

import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from awsprovider.acctest.checks import CheckFunc
from awsprovider.acctest.hcl import DATA_MODE, ConfigBlock, parse_config
from awsprovider.exceptions import AcceptanceTestError, ProviderError
from awsprovider.helpers.logger import get_logger
from awsprovider.sdk.schema import UNKNOWN_VALUE, Diagnostics, Resource, ResourceData

if TYPE_CHECKING:
    from awsprovider.provider.provider import Provider

logger = get_logger(__name__)

# Arguments the host runtime handles itself.
META_ARGUMENTS = ("count", "depends_on", "for_each", "lifecycle", "provider", "provisioner", "connection")

_MAX_WORKERS = 8


@dataclass
class ResourceState:
    type: str
    id: str
    attributes: dict[str, str]
    data: ResourceData


@dataclass
class State:
    resources: dict[str, ResourceState] = field(default_factory=dict)

    def of_type(self, type_name: str) -> list[ResourceState]:
        return [r for r in self.resources.values() if r.type == type_name]


@dataclass
class TestStep:
    __test__ = False

    config: str = ""
    check: Optional[CheckFunc] = None
    resource_name: str = ""
    import_state: bool = False
    import_state_verify: bool = False
    import_state_verify_ignore: list[str] = field(default_factory=list)
    expect_error: Optional[Union[str, "re.Pattern[str]"]] = None


@dataclass
class TestCase:
    __test__ = False

    providers: dict[str, "Provider"]
    steps: list[TestStep]
    pre_check: Optional[Callable[[], None]] = None
    check_destroy: Optional[Callable[[State], None]] = None


def plan_block(
    descriptor: Resource, body: dict[str, Any], type_name: str
) -> tuple[Optional[ResourceState], Diagnostics]:
    """Validate one block and build its planned state."""
    raw = {k: v for k, v in body.items() if k not in META_ARGUMENTS}
    diags = descriptor.validate(raw)
    if diags.has_error():
        return None, diags

    d = descriptor.decode(raw, id=UNKNOWN_VALUE)
    for key, attr in descriptor.schema.items():
        if attr.computed and not d.has(key):
            d.set(key, UNKNOWN_VALUE)
    return ResourceState(type_name, d.id, d.state(), d), diags


class _Runner:
    def __init__(self, case: TestCase, parallel: bool) -> None:
        self.case = case
        self.parallel = parallel
        self.state = State()

    def _provider(self, block: ConfigBlock) -> "Provider":
        provider = self.case.providers.get(block.provider_name)
        if provider is None:
            raise AcceptanceTestError(f"{block.address}: no provider named {block.provider_name!r} in this test")
        return provider

    def _plan(self, block: ConfigBlock) -> tuple[Optional[ResourceState], Diagnostics]:
        provider = self._provider(block)
        try:
            if block.mode == DATA_MODE:
                descriptor = provider.data_source(block.type)
            else:
                descriptor = provider.resource(block.type)
            planned, diags = plan_block(descriptor, block.body, block.type)
        except ProviderError as e:
            return None, Diagnostics.from_error(e)
        return planned, Diagnostics(replace(d, summary=f"{block.address}: {d.summary}") for d in diags)

    def config_step(self, number: int, step: TestStep) -> None:
        config = parse_config(step.config)
        diags = Diagnostics()
        for name, raw in config.providers.items():
            if name in self.case.providers:
                diags.extend(self.case.providers[name].validate(raw))

        blocks = config.blocks()
        if self.parallel and len(blocks) > 1:
            with ThreadPoolExecutor(max_workers=min(_MAX_WORKERS, len(blocks))) as executor:
                results = list(executor.map(self._plan, blocks))
        else:
            results = [self._plan(block) for block in blocks]

        state = State()
        for block, (planned, block_diags) in zip(blocks, results):
            diags.extend(block_diags)
            if planned is not None:
                state.resources[block.address] = planned

        if step.expect_error is not None:
            pattern = re.compile(step.expect_error) if isinstance(step.expect_error, str) else step.expect_error
            if not diags.has_error():
                raise AcceptanceTestError(f"Step {number}: expected an error but got none")
            if not any(pattern.search(str(d)) for d in diags.errors()):
                raise AcceptanceTestError(
                    f"Step {number}: expected an error matching {pattern.pattern!r}, got:\n{diags}"
                )
            return

        if diags.has_error():
            raise AcceptanceTestError(f"Step {number} error: {diags}")
        for warning in diags.warnings():
            logger.warning("Step %d: %s", number, warning)

        self.state = state
        if step.check is not None:
            try:
                step.check(state)
            except AssertionError as e:
                raise AcceptanceTestError(f"Check failed in step {number}: {e}") from e

    def import_step(self, number: int, step: TestStep) -> None:
        existing = self.state.resources.get(step.resource_name)
        if existing is None:
            raise AcceptanceTestError(f"Step {number}: {step.resource_name} not found in state")

        block_type = step.resource_name.split(".")[0]
        provider = self.case.providers.get(block_type.split("_", 1)[0])
        if provider is None:
            raise AcceptanceTestError(f"Step {number}: no provider for {block_type}")
        descriptor = provider.resource(block_type)
        if not descriptor.importable:
            raise AcceptanceTestError(f"Step {number}: resource {block_type} doesn't support import")

        source = descriptor.data(existing.data.values(), id=existing.id)
        imported = descriptor.importer.state(source, provider.meta)
        if not imported:
            raise AcceptanceTestError(f"Step {number}: import of {step.resource_name} returned no resources")

        if step.import_state_verify:
            self._verify_import(number, existing.attributes, imported[0].state(), step.import_state_verify_ignore)

    @staticmethod
    def _verify_import(number: int, expected: dict[str, str], actual: dict[str, str], ignore: list[str]) -> None:
        def keep(key: str) -> bool:
            return not any(key.startswith(prefix) for prefix in ignore)

        expected = {k: v for k, v in expected.items() if keep(k)}
        actual = {k: v for k, v in actual.items() if keep(k)}
        if expected != actual:
            lines = [
                f"  {key}: {expected.get(key)!r} => {actual.get(key)!r}"
                for key in sorted(set(expected) | set(actual))
                if expected.get(key) != actual.get(key)
            ]
            raise AcceptanceTestError(
                f"Step {number}: ImportStateVerify attributes not equivalent:\n" + "\n".join(lines)
            )

    def run(self) -> State:
        if self.case.pre_check is not None:
            self.case.pre_check()

        for number, step in enumerate(self.case.steps, start=1):
            if step.import_state:
                logger.debug("Step %d: importing %s", number, step.resource_name)
                self.import_step(number, step)
            else:
                logger.debug("Step %d: planning configuration", number)
                self.config_step(number, step)

        if self.case.check_destroy is not None:
            self.case.check_destroy(self.state)
        return self.state


def run(case: TestCase) -> State:
    """Run the steps in order. Raises AcceptanceTestError on the first failing step."""
    return _Runner(case, parallel=False).run()


def parallel_test(case: TestCase) -> State:
    """Like run(), but blocks within a step are planned concurrently."""
    return _Runner(case, parallel=True).run()
