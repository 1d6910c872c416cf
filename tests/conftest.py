"""Shared fixtures: a small guide collection used across unit and integration tests"""

import sys
from pathlib import Path

import pytest

# Add project root to path for kb_search imports when not installed
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from kb_search.models import Guide, Step


@pytest.fixture
def password_guide():
    """Guide from the scoring example: 'password' scores 26"""
    return Guide(
        id="pw-reset",
        title="Password Reset Procedure",
        summary="Step-by-step guide to reset user passwords",
        tags=["password", "active-directory"],
        category="Accounts",
        steps=[Step(title="Verify User Identity", body_rich="<p>password password</p>")],
    )


@pytest.fixture
def guides(password_guide):
    """Mixed collection, ids in insertion order: pw-reset, vpn, mfa, printer, onboarding"""
    return [
        password_guide,
        Guide(
            id="vpn",
            title="VPN Setup on Windows",
            summary="Connect to the corporate network from home",
            tags=["vpn", "network", "remote"],
            category="Network",
            steps=[
                Step(title="Install the client", body_rich="<p>Download the <b>VPN</b> client from the portal.</p>"),
                Step(title="Sign in", body_rich="<p>Use your network password and MFA code.</p>"),
            ],
        ),
        Guide(
            id="mfa",
            title="Enroll in Multi-Factor Authentication",
            summary="Set up the authenticator app",
            tags=["mfa", "security"],
            category="Accounts",
            steps=[Step(title="Scan QR code", body_rich="<ol><li>Open the app</li><li>Scan the code</li></ol>")],
        ),
        Guide(
            id="printer",
            title="Add a Network Printer",
            summary="Install shared printers on your laptop",
            tags=["printer", "network"],
            category="Hardware",
            steps=[Step(title="Open Settings", body_rich="Go to <i>Printers &amp; Scanners</i>")],
        ),
        Guide(id="onboarding", title="New Hire Onboarding"),
    ]
