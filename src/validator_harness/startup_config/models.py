"""Startup configuration handed to the validator launcher."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset values and convert keys to camelCase."""
    return {_camel_case(key): value for key, value in values.items() if value is not None}


@dataclass
class AccountConfig:
    """Account cloned into the validator at startup."""

    account_id: str
    label: Optional[str] = None
    cluster: Optional[str] = None
    executable: Optional[bool] = None

    def to_payload(self) -> Dict[str, Any]:
        return _compact(
            {
                "label": self.label,
                "account_id": self.account_id,
                "cluster": self.cluster,
                "executable": self.executable,
            }
        )


@dataclass
class ProgramConfig:
    """Program deployed into the validator at startup."""

    program_id: str
    deploy_path: str
    label: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return _compact({"label": self.label, "program_id": self.program_id, "deploy_path": self.deploy_path})


@dataclass
class ValidatorConfig:
    kill_running_validators: Optional[bool] = None
    accounts: List[AccountConfig] = field(default_factory=list)
    programs: List[ProgramConfig] = field(default_factory=list)
    json_rpc_url: Optional[str] = None
    websocket_url: Optional[str] = None
    commitment: Optional[str] = None
    ledger_dir: Optional[str] = None
    reset_ledger: Optional[bool] = None
    verify_fees: Optional[bool] = None

    def to_payload(self) -> Dict[str, Any]:
        payload = _compact(
            {
                "kill_running_validators": self.kill_running_validators,
                "json_rpc_url": self.json_rpc_url,
                "websocket_url": self.websocket_url,
                "commitment": self.commitment,
                "ledger_dir": self.ledger_dir,
                "reset_ledger": self.reset_ledger,
                "verify_fees": self.verify_fees,
            }
        )
        if self.accounts:
            payload["accounts"] = [account.to_payload() for account in self.accounts]
        if self.programs:
            payload["programs"] = [program.to_payload() for program in self.programs]
        return payload


@dataclass
class RelayConfig:
    enabled: Optional[bool] = None
    kill_running_relay: Optional[bool] = None

    def to_payload(self) -> Dict[str, Any]:
        return _compact({"enabled": self.enabled, "kill_running_relay": self.kill_running_relay})


@dataclass
class StorageConfig:
    enabled: Optional[bool] = None
    storage_id: Optional[str] = None
    clear_on_start: Optional[bool] = None

    def to_payload(self) -> Dict[str, Any]:
        return _compact(
            {
                "enabled": self.enabled,
                "storage_id": self.storage_id,
                "clear_on_start": self.clear_on_start,
            }
        )


@dataclass
class StartupConfig:
    """
    Configuration the validator reads when it starts.

    ``assets_folder`` left unset is filled in by the supervisor with its own
    fixtures assets directory before the config is written.
    """

    validator: Optional[ValidatorConfig] = None
    relay: Optional[RelayConfig] = None
    storage: Optional[StorageConfig] = None
    assets_folder: Optional[str] = None

    def set_validator(self, validator: ValidatorConfig) -> "StartupConfig":
        return replace(self, validator=validator)

    def set_relay(self, relay: RelayConfig) -> "StartupConfig":
        return replace(self, relay=relay)

    def set_storage(self, storage: StorageConfig) -> "StartupConfig":
        return replace(self, storage=storage)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for key, section in (("validator", self.validator), ("relay", self.relay), ("storage", self.storage)):
            if section is not None:
                payload[key] = section.to_payload()
        if self.assets_folder is not None:
            payload["assetsFolder"] = self.assets_folder
        return payload


__all__ = [
    "AccountConfig",
    "ProgramConfig",
    "RelayConfig",
    "StartupConfig",
    "StorageConfig",
    "ValidatorConfig",
]
