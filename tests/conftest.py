import pytest

from loanquote.config import config_from_dict

TEST_FEES = {
    "origination_points": 0.0,
    "admin_fee": 995.0,
    "processing_fee": 595.0,
    "underwriting_fee": 995.0,
    "appraisal_fee": 550.0,
    "credit_report_fee": 65.0,
    "flood_cert_fee": 15.0,
    "tax_service_fee": 85.0,
    "doc_prep_fee": 150.0,
    "settlement_fee": 750.0,
    "notary_fee": 150.0,
    "recording_fee": 150.0,
    "courier_fee": 35.0,
    "owner_title_policy": 0.0,
    "lender_title_policy": 0.0,
    "pest_inspection_fee": 0.0,
    "property_inspection_fee": 0.0,
    "pool_inspection_fee": 0.0,
}


@pytest.fixture
def config():
    return config_from_dict({"fees": TEST_FEES})
