"""Config hash shared by telemetry and scripts/audit_sim.py.

The hash MUST be computed identically in both places.
"""
import hashlib
import json

from slotspin.config import settings
from slotspin.logic.lines import RUN_MULTIPLIER_TENTHS
from slotspin.logic.reel import BAND_TABLE


def get_config_hash() -> str:
    """
    Hash the paytables and money-affecting settings.

    Returns 16-char hex hash of config snapshot.
    """
    config_snapshot = {
        "reel_bands": [
            [rule.band.value, rule.upper, rule.payout_x] for rule in BAND_TABLE
        ],
        "grid_run_tenths": {str(k): v for k, v in RUN_MULTIPLIER_TENTHS.items()},
        "credit_amount": settings.credit_amount,
        "enforce_sufficient_funds": settings.enforce_sufficient_funds,
    }
    canonical = json.dumps(config_snapshot, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()[:16]
