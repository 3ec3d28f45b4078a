"""
Data Function Example - Compound rules calling node data functions.
"""

import tempfile
from pathlib import Path

from action_policy import ActionPolicy, AuthorizationRequest
from action_policy.adapters import (
    CompoundMatcher,
    DataFunctionRegistry,
    MemoryConfigAdapter,
    MemoryFactAdapter,
    MemoryClassificationAdapter,
)

functions = DataFunctionRegistry()


@functions.register("puppet")
def puppet(_):
    """Pretend the Puppet agent is disabled on this node."""
    return {"enabled": False, "idling": True}


@functions.register("uptime")
def uptime(_):
    return 86400


def main():
    configdir = Path(tempfile.mkdtemp())
    (configdir / "policies").mkdir()
    (configdir / "policies" / "default.policy").write_text(
        "allow\tuid=700\trestart\tenvironment=development and puppet().enabled=false\n"
        "allow\tuid=700\treboot\tuptime()>=3600 and not production\n"
    )

    policy = ActionPolicy(
        config=MemoryConfigAdapter(configdir, {"actionpolicy.enable_default": "1"}),
        facts=MemoryFactAdapter({"environment": "development"}),
        classes=MemoryClassificationAdapter({"webserver"}),
        engine=CompoundMatcher(functions),
    )

    for action in ("restart", "reboot", "stop"):
        decision = policy.evaluate(AuthorizationRequest("service", "uid=700", action))
        print(f"{action}: {decision.decision.value} ({decision.reason})")


if __name__ == "__main__":
    main()
