import click

from earn_vault.constants import MAX_UINT256
from earn_vault.earn_vault import EarnVault
from earn_vault.legos.erc4626_lego import Erc4626Lego
from earn_vault.mock.mock_erc20 import MockErc20
from earn_vault.mock.mock_yield_vault import MockYieldVault
from earn_vault.modules.addys import generate_address
from earn_vault.utils import log
from scripts.utils import json_file
from scripts.utils.deploy_args import DeployArgs


SNAPSHOT_DIR = "./simulation_history"


CLICK_PROMPTS = {
    "blueprint": {
        "prompt": "Blueprint",
        "default": "local",
        "help": "Blueprint whose vault params are used. Defaults to `local`.",
        "type": click.Choice(["local", "base"], case_sensitive=False),
    },
    "asset": {
        "prompt": "Vault asset",
        "default": "USDC",
        "help": "Asset of the simulated vault (see VAULT_INFO). Defaults to `USDC`.",
        "type": click.Choice(["USDC", "WETH", "CBBTC"], case_sensitive=False),
    },
    "deposit": {
        "prompt": "Deposit amount (whole tokens)",
        "default": 100_000,
        "help": "Amount the depositor puts in, in whole tokens. Defaults to `100000`.",
    },
    "profit": {
        "prompt": "Target profit (whole tokens)",
        "default": 10_000,
        "help": "Yield accrued by the target before harvesting. Defaults to `10000`.",
    },
}


def param_prompt(ctx, param, value):
    param_config = CLICK_PROMPTS.get(param.name)
    if param_config is None:
        return value

    if value != param_config["default"] or ctx.params.get("silent"):
        return value

    return click.prompt(
        f"{param_config['prompt']} --{param.name.replace('_', '-')}",
        default=param_config["default"],
        type=param_config.get("type"),
    )


def deploy_vault(deploy_args):
    """Mock asset + target + lego + vault for the given deploy args"""
    info = deploy_args.vault_info
    asset = MockErc20(f"Mock {deploy_args.asset}", deploy_args.asset, info["decimals"], deploy_args.token_address)
    target = MockYieldVault(asset, deploy_args.blueprint.PARAMS["MOCK_TARGET_DEPOSIT_CAP"])
    lego = Erc4626Lego(target, asset)
    vault = EarnVault(asset, lego, deploy_args.treasury, **deploy_args.vault_kwargs())
    return asset, target, vault


def run_scenario(deploy_args, deposit, profit, break_target=False):
    """
    Deposit, accrue profit, harvest, then walk the vault through
    emergency and recovery and let everyone redeem.
    """
    asset, target, vault = deploy_vault(deploy_args)
    decimals = asset.decimals()
    unit = 10 ** decimals
    alice = generate_address("alice")

    def fmt(_amount):
        return f"{log.fmt_amount(_amount, decimals)} {asset.symbol()}"

    log.h2("Deposit")
    asset.mint(alice, deposit * unit)
    asset.approve(vault.address, MAX_UINT256, sender=alice)
    shares = vault.deposit(deposit * unit, alice, sender=alice)
    log.h3(f"alice deposited {fmt(deposit * unit)} for {shares} shares")

    log.h2("Profit + harvest")
    asset.mint(target.address, profit * unit)
    feeShares = vault.harvestFees()
    log.h3(f"treasury received {feeShares} shares worth {fmt(vault.convertToAssets(feeShares))}")
    log.h3(f"alice position worth {fmt(vault.convertToAssets(vault.balanceOf(alice)))}")

    log.h2("Emergency")
    recovered = vault.activateEmergencyMode()
    log.h3(f"recovered {fmt(recovered)} from target, idle {fmt(vault.idleBalance())}")

    if break_target:
        target.setShouldRevert(True)
        log.h3("target now reverts on every call")

    log.h2("Recovery")
    recoveryAssets = vault.activateRecovery()
    log.h3(f"frozen ratio: {fmt(recoveryAssets)} for {vault.recoverySupply()} shares")

    for name, user in [("alice", alice), ("treasury", deploy_args.treasury)]:
        userShares = vault.balanceOf(user)
        if userShares == 0:
            continue
        assets = vault.redeem(userShares, user, user, sender=user)
        log.h3(f"{name} redeemed {userShares} shares for {fmt(assets)}")

    return vault


@click.command()
@click.option("--silent", is_flag=True, default=False, help="Run command without prompts.", is_eager=True)
@click.option(
    "--blueprint", "-b",
    default=CLICK_PROMPTS["blueprint"]["default"],
    help=CLICK_PROMPTS["blueprint"]["help"],
    type=CLICK_PROMPTS["blueprint"]["type"],
    callback=param_prompt,
)
@click.option(
    "--asset", "-a",
    default=CLICK_PROMPTS["asset"]["default"],
    help=CLICK_PROMPTS["asset"]["help"],
    type=CLICK_PROMPTS["asset"]["type"],
    callback=param_prompt,
)
@click.option(
    "--deposit", "-d",
    default=CLICK_PROMPTS["deposit"]["default"],
    help=CLICK_PROMPTS["deposit"]["help"],
    type=int,
    callback=param_prompt,
)
@click.option(
    "--profit", "-p",
    default=CLICK_PROMPTS["profit"]["default"],
    help=CLICK_PROMPTS["profit"]["help"],
    type=int,
    callback=param_prompt,
)
@click.option("--reward-fee", default=None, type=int, help="Override the blueprint reward fee (bps).")
@click.option("--break-target", is_flag=True, default=False, help="Make the target revert before recovery.")
@click.option("--output", "-o", default="", help="Snapshot file. Defaults to `./simulation_history/<blueprint>-<asset>.json`.")
def cli(silent, blueprint, asset, deposit, profit, reward_fee, break_target, output):
    """
    Simulates an earn vault lifecycle against mock collaborators.

    A single depositor enters, the target accrues profit, the reward fee
    is harvested to the treasury, and the vault is then moved through
    emergency mode (draining the target) and recovery mode (freezing the
    redeemable ratio) before every holder redeems.

    The final vault snapshot is written as JSON.
    """

    overrides = {}
    if reward_fee is not None:
        overrides["EARN_VAULT_REWARD_FEE"] = reward_fee

    treasury = generate_address("treasury")
    deploy_args = DeployArgs(blueprint, asset.upper(), treasury, overrides)

    log.h1("Earn Vault Simulation")
    log.kv("Deploy args", deploy_args)
    for key, value in deploy_args.vault_kwargs().items():
        log.kv(key.lstrip("_"), value)
    log.kv("Break target", break_target)

    vault = run_scenario(deploy_args, deposit, profit, break_target)

    filename = output or f"{SNAPSHOT_DIR}/{blueprint}-{asset.upper()}.json"
    json_file.save(filename, vault.getVaultSnapshot())
    log.info(f"Snapshot saved to {filename}")
    log.info("Done.")
    log.info("")


if __name__ == "__main__":
    cli()
