"""Shared fixtures for the DSF performance tests."""

import pytest

from utils.dsf_performance.csv_parser import parse_csv
from utils.dsf_performance.records import SalesRecord, normalize_rows


SAMPLE_DSF_CSV = (
    "BRAND;ID_DSF;NAMA_DSF;MC;BRANCH;REGION;ID_TL;NAMA_TL;TOTAL_FWA;REV_REBUY;"
    "DATA_FWA_IM3;DATA_FWA_3ID;DATA_REBUY_IM3;DATA_REBUY_3ID\n"
    "IM3;D1;Andi;MC A;Medan;Northern Sumatra;TL1;Budi;22;0;20260215;20260214;20260213;20260212\n"
    "IM3;D2;Citra;MC A;Medan;Northern Sumatra;TL1;Budi;20;Rp 500.000;;;;\n"
    "3ID;D3;Dedi;MC B;Padang;central;TL2;Fitri;10;0;;;;\n"
    "3ID;D4;Eka;MC B;Padang;Southern Sumatra;TL2;Fitri;15;\"Rp 2.250.000\";;;;\n"
)

SAMPLE_BRANCH_CSV = (
    "REGION;BRANCH;QTY_DSF;FWA_SALES\n"
    "Northern Sumatra;Medan;10;250\n"
    "Central Sumatra;Padang;5;50\n"
    "Southern Sumatra;Palembang;4;80\n"
    "Southern Sumatra;Bengkulu;0;0\n"
)


def make_record(id_dsf="X1", fwa_units=0, rebuy_revenue=0, **overrides) -> SalesRecord:
    values = dict(
        brand="IM3",
        id_dsf=id_dsf,
        nama_dsf=f"Name {id_dsf}",
        mc="MC A",
        branch="Medan",
        region="Northern Sumatra",
        id_tl="TL1",
        nama_tl="Budi",
        fwa_units=fwa_units,
        rebuy_revenue=rebuy_revenue,
    )
    values.update(overrides)
    return SalesRecord(**values)


@pytest.fixture
def records():
    return normalize_rows(parse_csv(SAMPLE_DSF_CSV))


@pytest.fixture
def dsf_csv_text():
    return SAMPLE_DSF_CSV


@pytest.fixture
def branch_csv_text():
    return SAMPLE_BRANCH_CSV
