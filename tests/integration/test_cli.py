"""
CLI integration tests using Click's test runner.

Tests verify that the CLI commands work end-to-end via the Click
CliRunner, with the JSON-RPC endpoint replaced by an in-memory chain.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from dbtc_sdk import __version__, config
from dbtc_sdk.cli import cli

from dbtc_sdk.errors import RpcError

from conftest import AGENCY_ADDRESS, DBTC_ADDRESS, DEPT_ADDRESS, OWNER_ADDRESS, PRIVATE_KEY, SIGNER, make_log

HOUSE_ADDRESS = "0x4444444444444444444444444444444444444444"
SENATE_ADDRESS = "0x5555555555555555555555555555555555555555"

# Keep the caller's environment out of the CLI
CLEAN_ENV = {"DBTC_CHAIN_MODE": None, "DBTC_API_KEY": None, "PRIVATE_KEY": None, "DBTC_ADDRESS": None}


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def invoke(runner: CliRunner, args: list[str], **env: str):
    return runner.invoke(cli, args, env={**CLEAN_ENV, **env})


class TestVersionAndInfo:
    """Test basic CLI commands."""

    def test_version(self, runner: CliRunner) -> None:
        result = invoke(runner, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help(self, runner: CliRunner) -> None:
        result = invoke(runner, [])
        assert result.exit_code == 0
        for command in ("init", "registry", "department", "agency", "whoami", "info"):
            assert command in result.output

    def test_info_not_configured(self, runner: CliRunner) -> None:
        result = invoke(runner, ["info"])
        assert result.exit_code == 2
        assert "SDK not configured" in result.output

    def test_info_from_options(self, runner: CliRunner) -> None:
        result = invoke(runner, ["--chain-mode", "testnet", "--api-key", "abc", "info"])
        assert result.exit_code == 0
        assert "Polygon Amoy" in result.output
        assert DBTC_ADDRESS in result.output
        assert "not set" in result.output

    def test_info_mainnet_not_deployed(self, runner: CliRunner) -> None:
        result = invoke(runner, ["info"], DBTC_CHAIN_MODE="mainnet", DBTC_API_KEY="abc")
        assert result.exit_code == 0
        assert "(not deployed)" in result.output

    def test_invalid_chain_mode(self, runner: CliRunner) -> None:
        result = invoke(runner, ["--chain-mode", "devnet", "--api-key", "abc", "info"])
        assert result.exit_code != 0


class TestWhoami:
    def test_no_key(self, runner: CliRunner) -> None:
        result = invoke(runner, ["--chain-mode", "testnet", "--api-key", "abc", "whoami"])
        assert result.exit_code == 1
        assert "No signer key found" in result.output

    def test_key_from_env(self, runner: CliRunner) -> None:
        result = invoke(
            runner, ["whoami"],
            DBTC_CHAIN_MODE="testnet", DBTC_API_KEY="abc", PRIVATE_KEY=PRIVATE_KEY,
        )
        assert result.exit_code == 0
        assert SIGNER in result.output

    def test_malformed_key(self, runner: CliRunner) -> None:
        result = invoke(
            runner, ["whoami"],
            DBTC_CHAIN_MODE="testnet", DBTC_API_KEY="abc", PRIVATE_KEY="0x1234",
        )
        assert result.exit_code == 2
        assert "Invalid private key" in result.output
        assert "Traceback" not in result.output


class TestInit:
    def test_generate_key(self, runner: CliRunner) -> None:
        result = invoke(runner, ["init", "--api-key", "abc", "--generate-key"])

        assert result.exit_code == 0, result.output
        assert "Configuration saved." in result.output

        env_path: Path = config.DBTC_ENV
        content = env_path.read_text(encoding="utf-8")
        assert "DBTC_CHAIN_MODE=testnet" in content
        assert "DBTC_API_KEY=abc" in content
        assert "PRIVATE_KEY=0x" in content

    def test_import_key(self, runner: CliRunner) -> None:
        result = invoke(
            runner,
            ["init", "--chain-mode", "mainnet", "--api-key", "abc", "--private-key", PRIVATE_KEY],
        )
        assert result.exit_code == 0, result.output
        assert SIGNER in result.output
        assert f"PRIVATE_KEY={PRIVATE_KEY}" in config.DBTC_ENV.read_text(encoding="utf-8")

    def test_read_only(self, runner: CliRunner) -> None:
        result = invoke(runner, ["init", "--api-key", "abc"])
        assert result.exit_code == 0, result.output
        assert "read-only" in result.output
        assert "PRIVATE_KEY" not in config.DBTC_ENV.read_text(encoding="utf-8")

    def test_prompts_for_api_key(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["init"], input="prompted-key\n", env=CLEAN_ENV)
        assert result.exit_code == 0, result.output
        assert "DBTC_API_KEY=prompted-key" in config.DBTC_ENV.read_text(encoding="utf-8")

    def test_invalid_key(self, runner: CliRunner) -> None:
        result = invoke(runner, ["init", "--api-key", "abc", "--private-key", "0x1234"])
        assert result.exit_code == 1
        assert "ERROR" in result.output


class TestRegistry:
    def test_phase(self, runner: CliRunner, chain) -> None:
        chain.on_call("DBTC", "getCurrentPhase", 2)
        chain.on_call("DBTC", "getCurrentFiscalYear", 2027)
        chain.on_call("DBTC", "getPhaseResponsibleDepartment", "01")

        result = invoke(runner, ["registry", "phase"])

        assert result.exit_code == 0, result.output
        assert "Technical Review (2)" in result.output
        assert "2027" in result.output
        assert "01" in result.output

    def test_unknown_phase(self, runner: CliRunner, chain) -> None:
        chain.on_call("DBTC", "getCurrentPhase", 7)
        chain.on_call("DBTC", "getCurrentFiscalYear", 2027)
        chain.on_call("DBTC", "getPhaseResponsibleDepartment", "")

        result = invoke(runner, ["registry", "phase"])

        assert result.exit_code == 0, result.output
        assert "Unknown (7)" in result.output

    def test_departments(self, runner: CliRunner, chain) -> None:
        chain.on_call("DBTC", "getDepartmentCodes", ["07"])
        chain.on_call("DBTC", "getDepartment", DEPT_ADDRESS)

        result = invoke(runner, ["registry", "departments"])

        assert result.exit_code == 0, result.output
        assert f"07: {DEPT_ADDRESS}" in result.output

    def test_unregistered_department(self, runner: CliRunner, chain) -> None:
        chain.on_call("DBTC", "isDepartmentRegistered", False)
        result = invoke(runner, ["registry", "department", "99"])
        assert result.exit_code == 1
        assert "not registered" in result.output

    def test_contract_missing(self, runner: CliRunner, chain) -> None:
        result = invoke(runner, ["registry", "owner"])
        assert result.exit_code == 6
        assert "returned no data" in result.output

    def test_add_department(self, runner: CliRunner, chain) -> None:
        chain.logs = [
            make_log(
                "DBTC", "DepartmentAdded", DBTC_ADDRESS,
                deptCode="07", deptContract=DEPT_ADDRESS, deptName="DepEd", isStandalone=False,
            )
        ]

        result = invoke(
            runner,
            ["registry", "add-department", "--code", "07", "--name", "DepEd",
             "--main-agency", "DepEd Central", "--owner", OWNER_ADDRESS],
        )

        assert result.exit_code == 0, result.output
        assert "SUCCESS" in result.output
        assert DEPT_ADDRESS in result.output

    def test_assign_phase_case_insensitive(self, runner: CliRunner, chain) -> None:
        result = invoke(runner, ["registry", "assign-phase", "budget_call", "01"])
        assert result.exit_code == 0, result.output
        assert "Budget Call" in result.output

    def test_reverted_exit_code(self, runner: CliRunner, chain) -> None:
        chain.status = "0x0"
        result = invoke(runner, ["registry", "start-budget-call"])
        assert result.exit_code == 4
        assert "reverted" in result.output


class TestAgencyCommands:
    def test_submit(self, runner: CliRunner, chain) -> None:
        chain.logs = [
            make_log(
                "Agency", "ProposalSubmitted", AGENCY_ADDRESS,
                tokenId=5, submitter=SIGNER, uri="ipfs://QmBudget",
            )
        ]

        result = invoke(
            runner,
            ["agency", "submit", AGENCY_ADDRESS, "--uri", "ipfs://QmBudget",
             "--prexc", "310100100001000", "--uacs", "5020101000", "--amount", "1000000"],
        )

        assert result.exit_code == 0, result.output
        assert "Token ID" in result.output
        assert "5" in result.output

    def test_submit_bad_amount(self, runner: CliRunner, chain) -> None:
        result = invoke(
            runner,
            ["agency", "submit", AGENCY_ADDRESS, "--uri", "u",
             "--prexc", "1", "--uacs", "2", "--amount", "ten"],
        )
        assert result.exit_code == 1
        assert "ERROR" in result.output
        assert chain.sent == []

    def test_info(self, runner: CliRunner, chain) -> None:
        chain.on_call("Agency", "getCode", "002")
        chain.on_call("Agency", "getName", "BLD")
        chain.on_call("Agency", "getDepartment", DEPT_ADDRESS)
        chain.on_call("Agency", "getOwner", OWNER_ADDRESS)
        chain.on_call("Agency", "getDocumentManagers", [])

        result = invoke(runner, ["agency", "info", AGENCY_ADDRESS])

        assert result.exit_code == 0, result.output
        assert "Agency 002: BLD" in result.output
        assert "(none)" in result.output

    def test_revise(self, runner: CliRunner, chain) -> None:
        chain.logs = [
            make_log(
                "Agency", "ProposalRevised", AGENCY_ADDRESS,
                originalTokenId=5, newTokenId=6, reason="Technical review comments",
            )
        ]

        result = invoke(
            runner,
            ["agency", "revise", AGENCY_ADDRESS, "5", "--uri", "ipfs://v2",
             "--prexc", "310100100001000", "--uacs", "5020101000", "--amount", "900000",
             "--reason", "Technical review comments"],
        )

        assert result.exit_code == 0, result.output
        assert "SUCCESS" in result.output
        assert "New token" in result.output
        assert "6" in result.output

    def test_amend(self, runner: CliRunner, chain) -> None:
        chain.logs = [
            make_log(
                "Agency", "ProposalAmended", AGENCY_ADDRESS,
                originalTokenId=6, newTokenId=9, reason="Bicam adjustments",
            )
        ]

        result = invoke(
            runner,
            ["agency", "amend", AGENCY_ADDRESS, "6", "--uri", "ipfs://v3",
             "--prexc", "310100100001000", "--uacs", "5020101000", "--amount", "800000",
             "--reason", "Bicam adjustments"],
        )

        assert result.exit_code == 0, result.output
        assert "New token" in result.output
        assert "9" in result.output

    def test_amend_reverted(self, runner: CliRunner, chain) -> None:
        chain.status = "0x0"
        result = invoke(
            runner,
            ["agency", "amend", AGENCY_ADDRESS, "6", "--uri", "u",
             "--prexc", "1", "--uacs", "2", "--amount", "3", "--reason", "r"],
        )
        assert result.exit_code == 4
        assert "reverted" in result.output

    @pytest.mark.parametrize("command", ["add-manager", "remove-manager", "transfer-ownership"])
    def test_role_commands(self, runner: CliRunner, chain, command: str) -> None:
        result = invoke(runner, ["agency", command, AGENCY_ADDRESS, HOUSE_ADDRESS])

        assert result.exit_code == 0, result.output
        assert "SUCCESS: Transaction confirmed!" in result.output
        assert len(chain.sent) == 1

    def test_role_command_rpc_error(self, runner: CliRunner, chain) -> None:
        chain.errors["eth_estimateGas"] = RpcError("RPC error: execution reverted: Not owner", code=3)

        result = invoke(runner, ["agency", "transfer-ownership", AGENCY_ADDRESS, OWNER_ADDRESS])

        assert result.exit_code == 3
        assert "Not owner" in result.output
        assert chain.sent == []

    def test_bad_agency_address(self, runner: CliRunner, chain) -> None:
        result = invoke(runner, ["agency", "add-manager", "0x123", HOUSE_ADDRESS])

        assert result.exit_code == 7
        assert "ERROR: Invalid contract address" in result.output
        assert "Traceback" not in result.output
        assert chain.sent == []


class TestDepartmentCommands:
    def test_info(self, runner: CliRunner, chain) -> None:
        chain.on_call("Department", "getCode", "07")
        chain.on_call("Department", "getName", "DepEd")
        chain.on_call("Department", "getDBTC", DBTC_ADDRESS)
        chain.on_call("Department", "getMainAgency", AGENCY_ADDRESS)
        chain.on_call("Department", "isStandalone", False)
        chain.on_call("Department", "getIsActualDepartment", True)
        chain.on_call("Department", "getAgencyCount", 3)
        chain.on_call("Department", "getDepartmentOwner", OWNER_ADDRESS)

        result = invoke(runner, ["department", "info", DEPT_ADDRESS])

        assert result.exit_code == 0, result.output
        assert "Department 07: DepEd" in result.output
        assert "regular" in result.output
        assert "not an actual department" not in result.output
        assert OWNER_ADDRESS in result.output
        assert "Agencies:     3" in result.output

    def test_info_contract_missing(self, runner: CliRunner, chain) -> None:
        result = invoke(runner, ["department", "info", DEPT_ADDRESS])
        assert result.exit_code == 6
        assert "getCode() returned no data" in result.output

    def test_agencies(self, runner: CliRunner, chain) -> None:
        chain.on_call("Department", "getAgencyCodes", ["002"])
        chain.on_call("Department", "getAgency", AGENCY_ADDRESS)

        result = invoke(runner, ["department", "agencies", DEPT_ADDRESS])

        assert result.exit_code == 0, result.output
        assert "Agencies: 1" in result.output
        assert f"002: {AGENCY_ADDRESS}" in result.output

    def test_no_agencies(self, runner: CliRunner, chain) -> None:
        chain.on_call("Department", "getAgencyCodes", [])
        result = invoke(runner, ["department", "agencies", DEPT_ADDRESS])
        assert result.exit_code == 0, result.output
        assert "No agencies registered." in result.output

    def test_add_agency(self, runner: CliRunner, chain) -> None:
        chain.logs = [
            make_log(
                "Department", "AgencyAdded", DEPT_ADDRESS,
                agencyCode="002", agencyContract=AGENCY_ADDRESS, agencyName="BLD",
            )
        ]

        result = invoke(
            runner,
            ["department", "add-agency", DEPT_ADDRESS, "--code", "002", "--name", "BLD",
             "--owner", OWNER_ADDRESS],
        )

        assert result.exit_code == 0, result.output
        assert "Adding agency 002 (BLD)" in result.output
        assert "SUCCESS" in result.output
        assert AGENCY_ADDRESS in result.output

    def test_add_agency_bad_owner(self, runner: CliRunner, chain) -> None:
        result = invoke(
            runner,
            ["department", "add-agency", DEPT_ADDRESS, "--code", "002", "--name", "BLD",
             "--owner", "not-an-address"],
        )

        assert result.exit_code == 7
        assert "ERROR: Invalid arguments for addAgency" in result.output
        assert "Traceback" not in result.output
        assert chain.sent == []

    def test_set_house_senate(self, runner: CliRunner, chain) -> None:
        result = invoke(
            runner,
            ["department", "set-house-senate", DEPT_ADDRESS,
             "--house", HOUSE_ADDRESS, "--senate", SENATE_ADDRESS],
        )

        assert result.exit_code == 0, result.output
        assert "SUCCESS: Transaction confirmed!" in result.output
        assert len(chain.sent) == 1

    def test_set_house_senate_reverted(self, runner: CliRunner, chain) -> None:
        chain.status = "0x0"
        result = invoke(
            runner,
            ["department", "set-house-senate", DEPT_ADDRESS,
             "--house", HOUSE_ADDRESS, "--senate", SENATE_ADDRESS],
        )
        assert result.exit_code == 4
        assert "reverted" in result.output
