from mergedeep import merge

from config.BluePrint import PARAMS, VAULT_INFO, TOKENS


class BluePrint:
    def __init__(self, blueprint, overrides=None):
        self.blueprint = blueprint
        self.PARAMS = merge({}, PARAMS[blueprint], overrides or {})
        self.TOKENS = TOKENS[blueprint]
        self.VAULT_INFO = VAULT_INFO


class DeployArgs:
    def __init__(self, blueprint, asset, treasury, overrides=None):
        self.blueprint = BluePrint(blueprint, overrides)
        self.asset = asset
        self.treasury = treasury

    @property
    def vault_info(self):
        return self.blueprint.VAULT_INFO[self.asset]

    @property
    def token_address(self):
        # None on blueprints without live tokens, the mock gets a fresh address
        return self.blueprint.TOKENS.get(self.asset)

    def vault_kwargs(self):
        """Constructor arguments for an EarnVault of this asset"""
        params = self.blueprint.PARAMS
        info = self.vault_info
        return {
            "_name": info["name"],
            "_symbol": info["symbol"],
            "_decimalsOffset": params["EARN_VAULT_DECIMALS_OFFSET"],
            "_minFirstDeposit": params.get("EARN_VAULT_MIN_FIRST_DEPOSIT", info["minFirstDeposit"]),
            "_rewardFeeBps": params["EARN_VAULT_REWARD_FEE"],
        }

    def __repr__(self):
        return f"DeployArgs(blueprint={self.blueprint.blueprint}, asset={self.asset}, treasury={self.treasury})"
