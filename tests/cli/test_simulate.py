from click.testing import CliRunner

from constants import SIX_DECIMALS
from scripts import simulate
from scripts.utils import json_file
from scripts.utils.deploy_args import DeployArgs
from earn_vault.modules.addys import generate_address
from earn_vault.utils import log


def test_deploy_args_vault_kwargs():
    """Test blueprint params and overrides feed the vault constructor"""
    treasury = generate_address("treasury")
    deploy_args = DeployArgs("local", "USDC", treasury, {"EARN_VAULT_REWARD_FEE": 12_00})

    kwargs = deploy_args.vault_kwargs()
    assert kwargs["_symbol"] == "evUSDC"
    assert kwargs["_rewardFeeBps"] == 12_00
    assert kwargs["_decimalsOffset"] == 6
    assert kwargs["_minFirstDeposit"] == 1 * SIX_DECIMALS

    # overrides never leak into the shared blueprint
    assert DeployArgs("local", "USDC", treasury).vault_kwargs()["_rewardFeeBps"] == 5_00


def test_deploy_vault_token_address():
    """Test base deploys reuse the live token address, local ones get a fresh one"""
    treasury = generate_address("treasury")

    base_args = DeployArgs("base", "USDC", treasury)
    asset, _target, vault = simulate.deploy_vault(base_args)
    assert asset.address == "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
    assert vault.asset() == asset.address

    local_args = DeployArgs("local", "USDC", treasury)
    assert local_args.token_address is None
    assert simulate.deploy_vault(local_args)[0].address != asset.address


def test_run_scenario_recovers_everyone(_testUnits):
    """Test the scripted lifecycle ends with every share redeemed"""
    deploy_args = DeployArgs("local", "USDC", generate_address("treasury"))
    vault = simulate.run_scenario(deploy_args, 100_000, 10_000)

    snapshot = vault.getVaultSnapshot()
    assert snapshot["mode"] == "RECOVERY"
    assert snapshot["totalSupply"] == 0
    assert snapshot["balances"] == {}
    assert snapshot["recoverySupply"] == 0
    _testUnits(0, snapshot["idleBalance"])

    asset = vault._asset
    _testUnits(109_500 * SIX_DECIMALS, asset.balanceOf(generate_address("alice")))
    _testUnits(500 * SIX_DECIMALS, asset.balanceOf(deploy_args.treasury))


def test_simulate_cli_writes_snapshot(tmp_path):
    """Test silent CLI run saves the final snapshot"""
    output = str(tmp_path / "snapshots" / "sim.json")

    result = CliRunner().invoke(
        simulate.cli,
        ["--silent", "-a", "WETH", "-d", "10", "-p", "1", "--reward-fee", "0", "--break-target", "-o", output],
    )
    assert result.exit_code == 0, result.output

    snapshot = json_file.load(output)
    assert snapshot["mode"] == "RECOVERY"
    assert snapshot["rewardFeeBps"] == 0
    assert snapshot["totalSupply"] == 0


def test_fmt_amount():
    """Test raw units render with the token's decimals"""
    assert log.fmt_amount(1_500_000, 6) == "1.500000"
    assert log.fmt_amount(109_500 * SIX_DECIMALS, 6) == "109,500.000000"
    assert log.fmt_amount(42, 0) == "42"
