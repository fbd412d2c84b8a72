from pathlib import Path
from unittest.mock import MagicMock

from slipstage.extraction.models import PaymentSlipFields
from slipstage.ingestion.models import SubmissionRow
from slipstage.pipeline.driver import RowResult
from slipstage.pipeline.recorder import SubmissionRecorder
from slipstage.staging.models import Stage, StagingArtifact


def _result() -> RowResult:
    row = SubmissionRow(file_name="A101", source_refs=("https://x/a.jpg",))
    artifact = StagingArtifact(
        document="A101", path=Path("/tmp/A101.jpg"), stage=Stage.PENDING_UPLOAD
    )
    return RowResult(row=row, staged=artifact, tiles=1, composed=False)


class TestSubmissionRecorder:
    def test_disabled_without_collaborators(self) -> None:
        assert SubmissionRecorder().enabled is False

    def test_extracts_then_persists(self) -> None:
        fields = PaymentSlipFields(amount=150000)
        extractor = MagicMock()
        extractor.extract.return_value = fields
        repository = MagicMock()
        result = _result()

        SubmissionRecorder(extractor=extractor, repository=repository).record(result)

        extractor.extract.assert_called_once_with(Path("/tmp/A101.jpg"))
        repository.insert_submission.assert_called_once_with(result.row, fields)

    def test_persists_without_extraction(self) -> None:
        repository = MagicMock()
        result = _result()

        recorder = SubmissionRecorder(repository=repository)
        recorder.record(result)

        assert recorder.enabled
        repository.insert_submission.assert_called_once_with(result.row, None)
