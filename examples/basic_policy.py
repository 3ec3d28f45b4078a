"""
Basic Policy Example - Authorize agent requests against a policy file.
"""

import tempfile
from pathlib import Path

from action_policy import ActionPolicy, AuthorizationRequest, AuthorizationDenied
from action_policy.adapters import (
    MemoryConfigAdapter,
    MemoryFactAdapter,
    MemoryClassificationAdapter,
)

POLICY = """\
# service agent policy
policy default deny
allow\tuid=500\t*\t*\t*
allow\tops\tstatus restart\tcustomer=acme\tacme::devserver
deny\t*\tstop\t*\t*
"""


def main():
    configdir = Path(tempfile.mkdtemp())
    (configdir / "policies").mkdir()
    (configdir / "policies" / "service.policy").write_text(POLICY)
    (configdir / "policies" / "groups").write_text("ops uid=600 uid=601\n")

    policy = ActionPolicy(
        config=MemoryConfigAdapter(configdir),
        facts=MemoryFactAdapter({"customer": "acme"}),
        classes=MemoryClassificationAdapter({"acme::devserver"}),
    )

    requests = [
        AuthorizationRequest(agent="service", caller_id="uid=500", action="stop"),
        AuthorizationRequest(agent="service", caller_id="uid=600", action="restart"),
        AuthorizationRequest(agent="service", caller_id="uid=600", action="stop"),
        AuthorizationRequest(agent="package", caller_id="uid=500", action="install"),
    ]

    for request in requests:
        try:
            policy.authorize(request)
            print(f"ALLOW {request.caller_id} {request.agent}#{request.action}")
        except AuthorizationDenied as e:
            print(f"DENY  {request.caller_id} {request.agent}#{request.action}: {e.reason}")


if __name__ == "__main__":
    main()
