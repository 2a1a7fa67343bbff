import copy
import json

import pytest
from pydantic import ValidationError

from loanquote.config import LoanConfig, config_from_dict, default_config, load_config
from loanquote.conventional import calculate_conventional_purchase
from loanquote.models import ConventionalPurchaseInput
from loanquote.presets import DEFAULT_CONFIG


def test_default_config_values():
    cfg = default_config()
    assert cfg.rates.conv30 == 7.0
    assert cfg.fees.processing_fee == 995
    assert cfg.prepaids.interest_days == 15
    assert cfg.limits.conforming == 766550
    assert cfg.fha.ufmip_purchase == 1.75
    assert cfg.va.ff_first_gt95 == 2.15
    assert cfg.mi_factors.standard.monthly[95][740] == 0.50


def test_default_config_is_shared():
    assert default_config() is default_config()


def test_config_is_frozen():
    cfg = default_config()
    with pytest.raises(ValidationError):
        cfg.fees.appraisal_fee = 1
    with pytest.raises(ValidationError):
        cfg.rates = None
    with pytest.raises(TypeError):
        cfg.mi_factors.standard.monthly[95][740] = 5.0
    with pytest.raises(TypeError):
        cfg.mi_factors.standard.single[95] = {}
    with pytest.raises(TypeError):
        del cfg.mi_factors.high_balance.monthly[97][620]
    assert cfg.mi_factors.standard.monthly[95][740] == 0.50


def test_shared_config_grids_cannot_change_later_results():
    data = ConventionalPurchaseInput(sales_price=500000, down_payment_percent=5, fico_tier=740, interest_rate=7)
    before = calculate_conventional_purchase(data, default_config())
    with pytest.raises(TypeError):
        default_config().mi_factors.standard.monthly[95][740] = 5.0
    after = calculate_conventional_purchase(data, default_config())
    assert before.monthly_payment.mortgage_insurance == 197.92
    assert after.monthly_payment.mortgage_insurance == 197.92


def test_config_dumps_to_plain_dicts():
    dumped = default_config().model_dump()
    assert type(dumped["mi_factors"]["standard"]["monthly"]) is dict
    assert type(dumped["mi_factors"]["standard"]["monthly"][95]) is dict
    assert LoanConfig.model_validate(dumped).model_dump() == dumped


def test_partial_override_keeps_defaults():
    cfg = config_from_dict({"fees": {"appraisal_fee": 700}, "limits": {"fha": 524225}})
    assert cfg.fees.appraisal_fee == 700
    assert cfg.fees.processing_fee == 995
    assert cfg.limits.fha == 524225
    assert cfg.limits.conforming == 766550


def test_override_accepts_string_tier_keys():
    cfg = config_from_dict({"mi_factors": {"standard": {"monthly": {"97": {"760": 0.6}}}}})
    assert cfg.mi_factors.standard.monthly[97][760] == 0.6
    assert cfg.mi_factors.standard.monthly[97][620] == 2.10


def test_negative_values_rejected():
    with pytest.raises(ValidationError):
        config_from_dict({"fees": {"appraisal_fee": -1}})
    with pytest.raises(ValidationError):
        config_from_dict({"fha": {"mip_30yr_gt95": -0.55}})


def test_unknown_keys_rejected():
    with pytest.raises(ValidationError):
        config_from_dict({"fees": {"appraisel_fee": 700}})


def test_incomplete_mi_table_rejected():
    data = copy.deepcopy(DEFAULT_CONFIG)
    del data["mi_factors"]["high_balance"]["single"][90][680]
    with pytest.raises(ValidationError):
        LoanConfig.model_validate(data)


def test_load_config_from_json(tmp_path):
    path = tmp_path / "loan.json"
    path.write_text(json.dumps({"rates": {"fha30": 6.25}, "company": {"name": "Acme Lending"}}))
    cfg = load_config(path)
    assert cfg.rates.fha30 == 6.25
    assert cfg.company.name == "Acme Lending"


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.json")
