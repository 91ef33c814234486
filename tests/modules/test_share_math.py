from hypothesis import given, strategies as st

from constants import SIX_DECIMALS
from earn_vault.modules import share_math
from earn_vault.modules.fee_harvester import calc_harvest


def test_mul_div_rounding():
    """Test floor vs ceil division"""
    assert share_math.mul_div(10, 3, 4) == 7
    assert share_math.mul_div(10, 3, 4, True) == 8
    # exact division never rounds up
    assert share_math.mul_div(10, 4, 4, True) == 10


def test_empty_vault_price():
    """Test first deposit mints 10**offset shares per asset unit"""
    assert share_math.to_shares(100, 0, 0, 0) == 100
    assert share_math.to_shares(100, 0, 0, 6) == 100 * 10 ** 6
    assert share_math.to_assets(100 * 10 ** 6, 0, 0, 6) == 100


def test_virtual_asset_term():
    """Test conversions use totalAssets + 1 and totalSupply + 10**offset"""
    totalSupply = 1_000 * 10 ** 6
    totalAssets = 2_000

    assert share_math.to_shares(500, totalSupply, totalAssets, 6) == 500 * (totalSupply + 10 ** 6) // (totalAssets + 1)
    assert share_math.to_assets(10 ** 9, totalSupply, totalAssets, 6) == 10 ** 9 * (totalAssets + 1) // (totalSupply + 10 ** 6)


def test_frozen_ratio_conversions():
    """Test frozen ratio math and empty-supply guard"""
    assert share_math.to_assets_frozen(50, 1_000, 100) == 500
    assert share_math.to_assets_frozen(1, 10, 3) == 3
    assert share_math.to_assets_frozen(10, 1_000, 0) == 0
    assert share_math.to_shares_frozen(500, 1_000, 100) == 50
    assert share_math.to_shares_frozen(500, 0, 100) == 0


@given(
    assets=st.integers(min_value=1, max_value=10 ** 30),
    totalSupply=st.integers(min_value=0, max_value=10 ** 36),
    totalAssets=st.integers(min_value=0, max_value=10 ** 30),
    offset=st.integers(min_value=0, max_value=18),
)
def test_rounding_favours_vault(assets, totalSupply, totalAssets, offset):
    """Test deposit-side shares never buy back more assets than were paid"""
    shares = share_math.to_shares(assets, totalSupply, totalAssets, offset)
    assert share_math.to_assets(shares, totalSupply, totalAssets, offset) <= assets

    # round up side is never cheaper than round down side
    assert share_math.to_shares(assets, totalSupply, totalAssets, offset, True) >= shares
    assert share_math.to_assets(shares, totalSupply, totalAssets, offset, True) >= share_math.to_assets(shares, totalSupply, totalAssets, offset)


#################
# Fee Harvester #
#################


def test_harvest_no_profit():
    """Test no fee below or at the high-water mark"""
    result = calc_harvest(1_000, 1_000, 10 ** 9, 5_00, 6)
    assert result.profit == 0
    assert result.feeShares == 0
    assert result.currentAssets == 1_000

    result = calc_harvest(900, 1_000, 10 ** 9, 5_00, 6)
    assert result.profit == 0
    assert result.feeShares == 0
    assert result.currentAssets == 900


def test_harvest_zero_fee_or_supply():
    """Test profit without fee shares when fee is 0 or nobody holds shares"""
    result = calc_harvest(1_100, 1_000, 10 ** 9, 0, 6)
    assert result.profit == 100
    assert result.feeValue == 0
    assert result.feeShares == 0

    result = calc_harvest(1_100, 1_000, 0, 5_00, 6)
    assert result.profit == 100
    assert result.feeShares == 0


def test_harvest_fee_value_exact():
    """Test fee shares are worth the fee value after minting"""
    totalSupply = 100_000 * SIX_DECIMALS * 10 ** 6
    lastTotalAssets = 100_000 * SIX_DECIMALS
    current = 110_000 * SIX_DECIMALS

    result = calc_harvest(current, lastTotalAssets, totalSupply, 5_00, 6)
    assert result.profit == 10_000 * SIX_DECIMALS
    assert result.feeValue == 500 * SIX_DECIMALS

    treasuryValue = share_math.to_assets(result.feeShares, totalSupply + result.feeShares, current, 6)
    assert abs(treasuryValue - result.feeValue) <= 2
