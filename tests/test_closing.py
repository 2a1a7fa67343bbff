from loanquote.closing import calculate_closing_costs, closing_costs_for_purchase, closing_costs_for_refinance
from loanquote.config import config_from_dict, default_config
from loanquote.models import FhaPurchaseInput, FhaRefinanceInput


def _costs(config, **kw):
    args = dict(
        annual_tax=6000,
        annual_insurance=1800,
        seller_credit=5000,
        lender_credit=1000,
        points=1,
    )
    args.update(kw)
    return calculate_closing_costs(400000, 7, config, **args)


def test_subtotals(config):
    cc = _costs(config)
    assert cc.origination_fee == 4000
    assert cc.total_lender_fees == 7450
    assert cc.total_third_party_fees == 1085
    assert cc.prepaid_interest == 1150.68
    assert cc.tax_reserves == 2000
    assert cc.insurance_reserves == 2100
    assert cc.total_prepaids == 5250.68
    assert cc.total_credits == 6000


def test_credits_are_not_part_of_total(config):
    cc = _costs(config)
    assert cc.total_closing_costs == 13785.68
    assert cc.net_closing_costs == 7785.68
    assert cc.adjustment == 0


def test_counts_default_to_configuration(config):
    cc = _costs(config, points=None)
    assert cc.origination_fee == 0
    assert cc.prepaid_interest_days == 15
    assert cc.tax_reserve_months == 4
    assert cc.insurance_reserve_months == 14


def test_custom_counts(config):
    cc = _costs(config, interest_days=30, tax_months=2, insurance_months=12)
    assert cc.prepaid_interest == 2301.37
    assert cc.tax_reserves == 1000
    assert cc.insurance_reserves == 1800


def test_prepaid_overrides(config):
    cc = _costs(config, prepaid_interest_override=1000, tax_reserves_override=0)
    assert cc.prepaid_interest == 1000
    assert cc.tax_reserves == 0
    assert cc.insurance_reserves == 2100
    assert cc.total_prepaids == 3100


def test_total_override_records_adjustment(config):
    cc = _costs(config, total_override=15000)
    assert cc.total_closing_costs == 15000
    assert cc.adjustment == 1214.32
    assert cc.net_closing_costs == 9000


def test_zero_override_is_ignored(config):
    assert _costs(config, total_override=0).total_closing_costs == 13785.68


def test_cash_single_premium_included(config):
    cc = _costs(config, single_premium_mi=5700)
    assert cc.single_premium_mi == 5700
    assert cc.total_closing_costs == 19485.68


def test_purchase_input_mapping(config):
    data = FhaPurchaseInput(
        sales_price=400000,
        interest_rate=7,
        property_tax_annual=6000,
        home_insurance_monthly=150,
        seller_credit=5000,
        lender_credit=1000,
        origination_points=1,
    )
    cc = closing_costs_for_purchase(data, 400000, config)
    assert cc.total_closing_costs == 13785.68
    assert cc.total_credits == 6000


def test_transfer_and_mortgage_tax_are_third_party_fees():
    plain = calculate_closing_costs(400000, 7, default_config())
    cfg = config_from_dict({"fees": {"transfer_tax": 1100, "mortgage_tax": 400, "misc_fee": 250}})
    cc = calculate_closing_costs(400000, 7, cfg)
    assert plain.transfer_tax == 0
    assert plain.misc_fee == 0
    assert plain.total_third_party_fees == 7720
    assert cc.transfer_tax == 1100
    assert cc.mortgage_tax == 400
    assert cc.total_third_party_fees == 9220
    assert cc.total_lender_fees == plain.total_lender_fees


def test_misc_fee_is_outside_subtotals():
    cfg = config_from_dict({"fees": {"transfer_tax": 1100, "mortgage_tax": 400, "misc_fee": 250}})
    cc = calculate_closing_costs(400000, 7, cfg)
    assert cc.misc_fee == 250
    assert cc.total_prepaids == 1150.68
    assert cc.total_closing_costs == 14320.68


def test_refinance_input_mapping():
    cfg = config_from_dict({"fees": {"transfer_tax": 1100, "mortgage_tax": 400}})
    data = FhaRefinanceInput(
        property_value=400000,
        existing_loan_balance=300000,
        new_loan_amount=320000,
        interest_rate=6.5,
        home_insurance_annual=1800,
        insurance_reserve_months=2,
    )
    cc = closing_costs_for_refinance(data, 325600, cfg)
    assert cc.transfer_tax == 0
    assert cc.owner_title_policy == 0
    assert cc.mortgage_tax == 400
    assert cc.origination_fee == 0
    assert cc.tax_reserve_months == 0
    assert cc.insurance_reserves == 300
    assert cc.seller_credit == 0
