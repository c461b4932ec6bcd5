import os
import sys
from pathlib import Path

# Minimal env variables so importing settings does not fail
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")
os.environ.setdefault("OWNER_IDS", "1")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from gatekeeper.config.models import SecurityConfig
from gatekeeper.handlers.commands import builtin_commands
from gatekeeper.services.commands import (
    CommandDispatcher,
    CommandRegistry,
    CooldownManager,
    PermissionChecker,
)
from gatekeeper.services.gatekeeper_service import GatekeeperService
from gatekeeper.services.localization import Localizer
from gatekeeper.services.security import BlockLists, SecurityGate
from tests.helpers import FakeClock, MemoryStore


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def make_gate(clock, store):
    def factory(lists=None, **config):
        return SecurityGate(
            config=SecurityConfig(**config),
            lists=lists or BlockLists(store=store),
            clock=clock,
        )
    return factory


@pytest.fixture
def make_service(clock, store):
    def factory(commands=(), owners=("1",), admins=("2",), prefix="/", builtins=False, lists=None, **security):
        gate = SecurityGate(
            config=SecurityConfig(**security),
            lists=lists or BlockLists(store=store),
            clock=clock,
        )
        service = GatekeeperService(
            gate=gate,
            registry=CommandRegistry(commands),
            permissions=PermissionChecker(owner_ids=owners, admin_ids=admins),
            cooldowns=CooldownManager(ttl_seconds=300, clock=clock),
            dispatcher=CommandDispatcher(clock=clock),
            localizer=Localizer(),
            prefix=prefix,
            default_cooldown_seconds=0,
            silent_reasons=gate.config.silent_reasons,
            clock=clock,
        )
        if builtins:
            service.registry.register_all(builtin_commands(service))
        return service
    return factory
