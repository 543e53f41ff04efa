import pytest

from series_store.errors import DirectoryNotFound, ExtensionContamination, UndefinedResumePoint
from series_store.index.spec_index import SpecIndex
from series_store.primitives import DataKind, Region, SeriesId, SeriesSpec
from series_store.reconcile.orphans import find_orphans
from series_store.reconcile.resume import resume_from
from series_store.reconcile.verify import verify
from series_store.resources.kinds import RawData, TransformedData


def spec(kind, region, sid):
    return SeriesSpec(kind, region, SeriesId(sid))


@pytest.fixture
def declared():
    return SpecIndex.from_records(
        [
            spec(DataKind.U, Region.AUSTRALIA, "AUSURAMS"),
            spec(DataKind.U, Region.AUSTRALIA, "AUSUREMPNA"),
            spec(DataKind.U, Region.AUSTRALIA, "AUSURANAA"),
            spec(DataKind.INF, Region.BELGIUM, "FPCPITOTLZGBEL"),
        ]
    )


# --- verify -------------------------------------------------------------------


def test_verify_reports_found_and_missing_without_aborting(data_root, declared):
    report = verify(declared, data_root)
    assert [e.spec.series_id for e in report.found] == ["AUSURAMS", "AUSURANAA", "FPCPITOTLZGBEL"]
    assert [e.filename for e in report.missing] == ["AUSUREMPNA.csv"]
    assert not report.ok
    assert report.summary() == {"declared": 4, "found": 3, "missing": 1}
    assert report.lines() == [
        " ok  AUSURAMS.csv",
        "none AUSUREMPNA.csv",
        " ok  AUSURANAA.csv",
        " ok  FPCPITOTLZGBEL.csv",
    ]


def test_verify_lists_each_bucket_once(data_root, declared, monkeypatch):
    calls = []
    original = RawData.list

    def counting_list(self, root):
        calls.append(self)
        return original(self, root)

    monkeypatch.setattr(RawData, "list", counting_list)
    verify(declared, data_root)
    assert calls == [
        RawData(DataKind.U, Region.AUSTRALIA),
        RawData(DataKind.INF, Region.BELGIUM),
    ]


def test_verify_fails_on_missing_bucket_directory(data_root, declared):
    declared.insert(spec(DataKind.CPI, Region.JAPAN, "JPNCPI"))
    with pytest.raises(DirectoryNotFound):
        verify(declared, data_root)


def test_verify_fails_on_contaminated_directory(data_root, declared):
    (data_root / "raw_data" / "inf" / "belgium" / "notes.txt").write_text("")
    with pytest.raises(ExtensionContamination) as exc:
        verify(declared, data_root)
    assert exc.value.extension == "txt"


def test_verify_transformed_tree(data_root):
    index = SpecIndex.from_records(
        [spec(DataKind.U, Region.AUSTRALIA, "AUSURAMS"), spec(DataKind.U, Region.AUSTRALIA, "AUSURANAA")]
    )
    report = verify(index, data_root, TransformedData)
    assert [e.found for e in report.entries] == [True, False]


def test_report_frame(data_root, declared):
    df = verify(declared, data_root).to_frame()
    assert list(df.columns) == ["data_kind", "region", "series_id", "filename", "found", "path"]
    assert df["found"].tolist() == [True, False, True, True]
    assert df.loc[3, "region"] == "belgium"
    assert df.loc[1, "path"] is None


def test_verify_is_read_only(data_root, declared):
    before = sorted(p for p in data_root.rglob("*"))
    verify(declared, data_root)
    verify(declared, data_root)
    assert sorted(p for p in data_root.rglob("*")) == before


# --- resume_from --------------------------------------------------------------


@pytest.fixture
def three_buckets():
    # bucket order: (U, Australia), (U, Belgium), (CPI, Australia)
    return SpecIndex.from_records(
        [
            spec(DataKind.CPI, Region.AUSTRALIA, "e"),
            spec(DataKind.U, Region.BELGIUM, "c"),
            spec(DataKind.U, Region.AUSTRALIA, "a"),
            spec(DataKind.U, Region.AUSTRALIA, "b"),
            spec(DataKind.U, Region.BELGIUM, "d"),
        ]
    )


def test_resume_continues_across_buckets(three_buckets):
    assert [s.series_id for s in resume_from(three_buckets, "c")] == ["d", "e"]
    assert [s.series_id for s in resume_from(three_buckets, "b")] == ["c", "d", "e"]
    assert resume_from(three_buckets, "e") == []


def test_resume_from_unknown_id(three_buckets):
    with pytest.raises(UndefinedResumePoint) as exc:
        resume_from(three_buckets, "z")
    assert exc.value.series_id == "z"


# --- find_orphans -------------------------------------------------------------


def test_find_orphans_uses_series_stem(tmp_path):
    d = tmp_path / "raw_data" / "u" / "australia"
    d.mkdir(parents=True)
    for name in ("AUSURAMS.csv", "AUSURAMS_adj.csv", "STRAYFILE.csv"):
        (d / name).write_text("")
    index = SpecIndex.from_records([spec(DataKind.U, Region.AUSTRALIA, "AUSURAMS")])
    orphans = find_orphans(index, tmp_path)
    assert [p.name for p in orphans] == ["STRAYFILE.csv"]
    # nothing is deleted
    assert (d / "STRAYFILE.csv").exists()


def test_find_orphans_includes_meta_files(data_root):
    index = SpecIndex.from_records([spec(DataKind.U, Region.AUSTRALIA, "AUSURANAA")])
    names = sorted(p.name for p in find_orphans(index, data_root))
    assert names == ["AUSURAMS.csv", "AUSURAMS.meta", "FPCPITOTLZGBEL.csv"]


@pytest.fixture
def all_declared():
    return SpecIndex.from_records(
        [
            spec(DataKind.U, Region.AUSTRALIA, "AUSURAMS"),
            spec(DataKind.U, Region.AUSTRALIA, "AUSURANAA"),
            spec(DataKind.INF, Region.BELGIUM, "FPCPITOTLZGBEL"),
        ]
    )


def test_find_orphans_reports_files_in_unknown_directories(data_root, all_declared, caplog):
    stray = data_root / "raw_data" / "u" / "atlantis"
    stray.mkdir()
    (stray / "STRAY.csv").write_text("")
    with caplog.at_level("WARNING"):
        orphans = find_orphans(all_declared, data_root)
    assert [p.name for p in orphans] == ["STRAY.csv"]
    assert orphans[0].parent.name == "atlantis"
    assert "atlantis is not a known country" in caplog.text


def test_find_orphans_reports_files_under_unknown_data_type(data_root, all_declared, caplog):
    stray = data_root / "raw_data" / "gdp" / "australia"
    stray.mkdir(parents=True)
    (stray / "AUSGDP.csv").write_text("")
    with caplog.at_level("WARNING"):
        assert [p.name for p in find_orphans(all_declared, data_root)] == ["AUSGDP.csv"]
    assert "gdp is not a known data type" in caplog.text


def test_find_orphans_reports_loose_files(data_root, all_declared, caplog):
    loose = data_root / "raw_data" / "u" / "LOOSE.csv"
    loose.write_text("")
    with caplog.at_level("WARNING"):
        assert [p.name for p in find_orphans(all_declared, data_root)] == [loose.name]
    assert "directly under" in caplog.text


def test_find_orphans_checks_extensions_in_unknown_directories(data_root, all_declared):
    stray = data_root / "raw_data" / "u" / "atlantis"
    stray.mkdir()
    (stray / "notes.txt").write_text("")
    with pytest.raises(ExtensionContamination) as exc:
        find_orphans(all_declared, data_root)
    assert exc.value.extension == "txt"


def test_declared_id_with_underscore_is_not_an_orphan(tmp_path):
    d = tmp_path / "raw_data" / "u" / "australia"
    d.mkdir(parents=True)
    (d / "AUS_UR.csv").write_text("")
    index = SpecIndex.from_records([spec(DataKind.U, Region.AUSTRALIA, "AUS_UR")])
    assert verify(index, tmp_path).ok
    assert find_orphans(index, tmp_path) == []


def test_find_orphans_transformed_tree(data_root):
    orphans = find_orphans(SpecIndex(), data_root, tree="transformed_data")
    assert [p.name for p in orphans] == ["AUSURAMS.csv"]


def test_find_orphans_requires_tree(tmp_path):
    with pytest.raises(DirectoryNotFound):
        find_orphans(SpecIndex(), tmp_path)
    with pytest.raises(ValueError):
        find_orphans(SpecIndex(), tmp_path, tree="specs")


def test_find_orphans_rejects_contamination(data_root):
    (data_root / "raw_data" / "u" / "australia" / "junk.xlsx").write_text("")
    with pytest.raises(ExtensionContamination):
        find_orphans(SpecIndex(), data_root)
