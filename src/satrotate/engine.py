"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/engine.py

Rotation engine: collect evidence -> resolve one reference -> rotate.

Stage 1 (collect)  pairwise hits of the anchor against every doubled
                   candidate; for the alignment-column strategy the
                   candidates are first put through the multiple aligner and
                   the doubled sequences are the ungapped alignment rows.
Stage 2 (resolve)  exactly one RotationReference for the whole run.
Stage 3 (rotate)   per sequence: map -> orient -> safe_rotate. Results keep
                   input order regardless of worker scheduling.

Stage 3 only starts once stage 2 has returned. Oracle failures abort the run;
per-sequence problems never do, the sequence is emitted unrotated instead.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence as SequenceT, Tuple

from ._logging import get_logger
from .config import RotateConfig
from .core.hits import AlignmentHit, Strand, best_hits_by_subject, filter_hits, orient
from .core.mapper import offset_for_column, offset_for_hit
from .core.resolver import RotationReference, resolve_anchor_offset, resolve_rotation_column
from .core.rotator import (
    RotationLogEntry,
    RotationStatus,
    is_circular_permutation,
    passthrough,
    safe_rotate,
)
from .core.sequences import Sequence, SequenceStore, clean_bases, reverse_complement
from .errors import IntegrityViolationError, PerSequenceUnmappableError
from .oracles.protocols import LocalAligner, MultipleAligner
from .registry import get_local_aligner_cls, get_multi_aligner_cls

_LOG = get_logger(__name__)

ProgressFactory = Optional[Callable[[str, int], Any]]  # returns handle with .update(n), .close()


@dataclass(frozen=True)
class Evidence:
    hits: Dict[str, AlignmentHit]
    alignment: Optional[Dict[str, str]] = None


@dataclass(frozen=True)
class RotationSummary:
    total: int
    rotated: int
    unchanged: int
    kept: int
    failures: Dict[str, int] = field(default_factory=dict)


@dataclass
class RotationResult:
    sequences: List[Sequence]
    log: List[RotationLogEntry]
    reference: RotationReference
    alignment: Optional[Dict[str, str]] = None

    def summary(self) -> RotationSummary:
        accepted = [e for e in self.log if e.accepted]
        rotated = sum(1 for e in accepted if e.offset)
        failures = Counter(e.status.value for e in self.log if not e.accepted)
        return RotationSummary(
            total=len(self.log),
            rotated=rotated,
            unchanged=len(accepted) - rotated,
            kept=len(self.log) - len(accepted),
            failures=dict(failures),
        )

    def get(self, seq_id: str) -> Sequence:
        for seq in self.sequences:
            if seq.id == seq_id:
                return seq
        raise KeyError(seq_id)


class RotationEngine:
    def __init__(
        self,
        config: Optional[RotateConfig] = None,
        *,
        local_aligner: Optional[LocalAligner] = None,
        multi_aligner: Optional[MultipleAligner] = None,
    ) -> None:
        self.config = config or RotateConfig()
        self.local_aligner = local_aligner or get_local_aligner_cls(self.config.local_aligner.name)(
            self.config.local_aligner
        )
        if multi_aligner is None and self.config.strategy == "alignment_column":
            multi_aligner = get_multi_aligner_cls(self.config.multi_aligner.name)(self.config.multi_aligner)
        self.multi_aligner = multi_aligner

    # ── helpers ──────────────────────────────────────────────────────────────

    def _map(self, fn: Callable, items: SequenceT) -> List:
        workers = self.config.workers
        if workers <= 1 or len(items) <= 1:
            return [fn(it) for it in items]
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(fn, items))

    def _align_doubled(self, anchor: Sequence, subjects: List[Sequence]) -> Dict[str, AlignmentHit]:
        if not subjects:
            return {}
        doubled = [s.doubled() for s in subjects]
        # single oracle call; hit E-values are relative to the whole library
        raw = list(self.local_aligner.align(anchor, doubled))
        kept = filter_hits(raw, min_score=self.config.min_score, min_identity=self.config.min_identity)
        if len(kept) < len(raw):
            _LOG.info("Discarded %d hits below the score/identity thresholds.", len(raw) - len(kept))
        return {subject_id: hit for (_, subject_id), hit in best_hits_by_subject(kept).items()}

    # ── stage 1 ──────────────────────────────────────────────────────────────

    def collect(self, anchor: Sequence, candidates: List[Sequence]) -> Evidence:
        if self.config.strategy == "per_sequence":
            _LOG.info("Aligning anchor against %d doubled sequences", len(candidates))
            return Evidence(hits=self._align_doubled(anchor, candidates))

        msa_input = list(candidates)
        if self.config.align_anchor:
            msa_input = [anchor, *msa_input]
        alignment: Dict[str, str] = {}
        if msa_input:
            _LOG.info("Building multiple alignment of %d sequences", len(msa_input))
            alignment = self.multi_aligner.align_multi(msa_input)
        ungapped = [
            Sequence(id=s.id, label=s.label, bases=clean_bases(alignment[s.id]))
            for s in candidates
            if s.id in alignment
        ]
        return Evidence(hits=self._align_doubled(anchor, ungapped), alignment=alignment)

    # ── stage 2 ──────────────────────────────────────────────────────────────

    def resolve(self, evidence: Evidence) -> RotationReference:
        kwargs = dict(
            min_score=self.config.min_score,
            min_identity=self.config.min_identity,
            strict=self.config.strict_no_hit,
        )
        if self.config.strategy == "per_sequence":
            return resolve_anchor_offset(evidence.hits.values(), **kwargs)
        return resolve_rotation_column(evidence.hits.values(), evidence.alignment or {}, **kwargs)

    # ── stage 3 ──────────────────────────────────────────────────────────────

    def _rotate_anchor(self, anchor: Sequence, reference: RotationReference) -> Tuple[Sequence, RotationLogEntry]:
        offset = reference.anchor_offset
        if 0 <= offset < anchor.length:
            return safe_rotate(anchor, offset)
        return passthrough(anchor, RotationStatus.INVALID_POS, f"Anchor offset {offset} out of range.")

    def _rotate_by_hit(
        self, seq: Sequence, reference: RotationReference, evidence: Evidence
    ) -> Tuple[Sequence, RotationLogEntry]:
        hit = evidence.hits.get(seq.id)
        if hit is None:
            return passthrough(seq, RotationStatus.NO_HIT, "No alignment hit; keeping as-is.")
        try:
            start = offset_for_hit(hit, reference.anchor_offset, seq.length)
        except PerSequenceUnmappableError as e:
            return passthrough(seq, RotationStatus.INVALID_POS, str(e), strand=hit.strand)
        return safe_rotate(orient(seq, hit), start, strand=hit.strand, original=seq)

    def _rotate_by_column(
        self, seq: Sequence, reference: RotationReference, evidence: Evidence
    ) -> Tuple[Sequence, RotationLogEntry]:
        gapped = (evidence.alignment or {}).get(seq.id)
        if gapped is None:
            return passthrough(seq, RotationStatus.NO_ALIGNMENT, "Not found in alignment; keeping as-is.")
        if clean_bases(gapped).upper() != seq.bases.upper():
            return passthrough(seq, RotationStatus.NO_ALIGNMENT, "Alignment row does not match the input sequence.")
        try:
            start = offset_for_column(gapped, reference.rotation_column or 1, seq.length)
        except PerSequenceUnmappableError as e:
            return passthrough(seq, RotationStatus.INVALID_POS, str(e))
        return safe_rotate(seq, start)

    def rotate_one(
        self, seq: Sequence, anchor_id: str, reference: RotationReference, evidence: Evidence
    ) -> Tuple[Sequence, RotationLogEntry]:
        if not reference.resolved:
            return passthrough(seq, RotationStatus.NO_REFERENCE, "No rotation reference; keeping as-is.")
        if reference.strategy == "per_sequence":
            if seq.id == anchor_id:
                return self._rotate_anchor(seq, reference)
            return self._rotate_by_hit(seq, reference, evidence)
        if seq.id == anchor_id and seq.id not in (evidence.alignment or {}):
            return self._rotate_anchor(seq, reference)
        return self._rotate_by_column(seq, reference, evidence)

    # ── run ──────────────────────────────────────────────────────────────────

    def run(
        self,
        store: SequenceStore,
        anchor_id: str,
        *,
        progress_factory: ProgressFactory = None,
    ) -> RotationResult:
        anchor = store.require_anchor(anchor_id)
        candidates = store.without(anchor_id)
        _LOG.info("Anchor: %s (%d bp); %d candidate sequences", anchor.id, anchor.length, len(candidates))

        evidence = self.collect(anchor, candidates)
        reference = self.resolve(evidence)

        originals = list(store)
        handle = progress_factory("rotate", len(originals)) if progress_factory else None

        def _one(seq: Sequence) -> Tuple[Sequence, RotationLogEntry]:
            out = self.rotate_one(seq, anchor_id, reference, evidence)
            if handle is not None:
                handle.update(1)
            return out

        try:
            results = self._map(_one, originals)
        finally:
            if handle is not None:
                handle.close()

        for seq, entry in results:
            if entry.accepted:
                _LOG.debug("%s: offset %s [%s]", seq.id, entry.offset, entry.status.value)
            else:
                _LOG.warning("%s: %s %s", entry.sequence_id, entry.status.value, entry.message)

        result = RotationResult(
            sequences=[seq for seq, _ in results],
            log=[entry for _, entry in results],
            reference=reference,
            alignment=evidence.alignment,
        )
        verify_result(originals, result)
        _log_summary(result.summary())
        return result


def verify_result(originals: List[Sequence], result: RotationResult) -> None:
    """Every emitted sequence must be a circular permutation of its input (or its reverse complement)."""
    if len(originals) != len(result.sequences):
        raise IntegrityViolationError(
            f"Expected {len(originals)} output sequences, got {len(result.sequences)}."
        )
    for orig, out, entry in zip(originals, result.sequences, result.log):
        if (orig.id, orig.label) != (out.id, out.label):
            raise IntegrityViolationError(f"Output order or labels changed at '{orig.id}'.")
        expected = orig.bases
        if entry.accepted and entry.strand is Strand.REVERSE:
            expected = reverse_complement(orig.bases)
        if not is_circular_permutation(expected, out.bases):
            raise IntegrityViolationError(f"{orig.id}: final sequence is not a valid rotation of the original!")


def _log_summary(summary: RotationSummary) -> None:
    _LOG.info("Total sequences processed: %d", summary.total)
    _LOG.info("Successfully rotated: %d (unchanged at offset 0: %d)", summary.rotated, summary.unchanged)
    _LOG.info("Failed/kept original: %d", summary.kept)
    for status, n in sorted(summary.failures.items()):
        _LOG.info("  %s: %d", status, n)
