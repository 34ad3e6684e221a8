"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/oracles/pairwise.py

In-process local-alignment oracle using Bio.Align.PairwiseAligner.

The query is aligned on both strands (Smith-Waterman, affine gaps) against
each subject, and the better strand is reported with the same conventions as
ssearch36 tabular output:
  - coordinates are 1-based inclusive;
  - a reverse-strand hit has query_start > query_end, expressed in the
    original (not complemented) query coordinates.

Scoring defaults: match 2, mismatch -3, gap open 5, gap extend 2. Gap
penalties are accepted as positive or negative and always applied as
negative scores.

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from typing import List, Optional, Sequence as SequenceT, Tuple

from Bio.Align import PairwiseAligner

from .._logging import get_logger
from ..config import LocalAlignerConfig
from ..core.hits import AlignmentHit
from ..core.sequences import Sequence, reverse_complement

_LOG = get_logger(__name__)

Span = Tuple[int, int, int, int, float, float]  # q0, q1, s0, s1 (0-based half-open), score, identity


class BiopythonLocalAligner:
    name = "biopython"

    def __init__(self, config: Optional[LocalAlignerConfig] = None) -> None:
        self.config = config or LocalAlignerConfig()

    def _build(self) -> PairwiseAligner:
        aligner = PairwiseAligner()
        aligner.mode = "local"
        aligner.match_score = self.config.match
        aligner.mismatch_score = self.config.mismatch
        aligner.open_gap_score = -abs(self.config.open_gap)
        aligner.extend_gap_score = -abs(self.config.extend_gap)
        return aligner

    @staticmethod
    def _span(aligner: PairwiseAligner, query: str, subject: str) -> Optional[Span]:
        score = aligner.score(query, subject)
        if score <= 0:
            return None
        alignment = aligner.align(query, subject)[0]
        q_blocks, s_blocks = alignment.aligned
        if len(q_blocks) == 0:
            return None

        matches = 0
        columns = 0
        prev_q = prev_s = None
        for (q0, q1), (s0, s1) in zip(q_blocks, s_blocks):
            if prev_q is not None:
                columns += (q0 - prev_q) + (s0 - prev_s)
            matches += sum(1 for a, b in zip(query[q0:q1], subject[s0:s1]) if a == b)
            columns += q1 - q0
            prev_q, prev_s = q1, s1

        identity = round(100.0 * matches / columns, 2) if columns else 0.0
        return (
            int(q_blocks[0][0]),
            int(q_blocks[-1][1]),
            int(s_blocks[0][0]),
            int(s_blocks[-1][1]),
            float(score),
            float(identity),
        )

    def hit_for(self, query: Sequence, subject: Sequence) -> Optional[AlignmentHit]:
        aligner = self._build()
        q = query.bases.upper()
        s = subject.bases.upper()
        fwd = self._span(aligner, q, s)
        rev = self._span(aligner, reverse_complement(q), s)
        if fwd is None and rev is None:
            return None

        length = len(q)
        if rev is None or (fwd is not None and fwd[4] >= rev[4]):
            q0, q1, s0, s1, score, identity = fwd
            q_start, q_end = q0 + 1, q1
        else:
            q0, q1, s0, s1, score, identity = rev
            # rc position i is original position L-1-i
            q_start, q_end = length - q0, length - q1 + 1

        return AlignmentHit(
            query_id=query.id,
            subject_id=subject.id,
            query_start=q_start,
            query_end=q_end,
            subject_start=s0 + 1,
            subject_end=s1,
            score=score,
            identity=identity,
        )

    def align(self, query: Sequence, subjects: SequenceT[Sequence]) -> List[AlignmentHit]:
        hits = []
        for subject in subjects:
            hit = self.hit_for(query, subject)
            if hit is None:
                _LOG.debug("No local alignment between %s and %s", query.id, subject.id)
                continue
            hits.append(hit)
        return hits
