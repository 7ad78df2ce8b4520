"""Tests for H1 persistence of Rips filtrations."""

import numpy as np
import pytest

from simplex_homology import compute_persistence
from simplex_homology.analysis.persistence import extract_persistence_pairs
from simplex_homology.geometry.filtration import build_rips_filtration
from simplex_homology.reduction.boundary_reduction import Column, ReductionResult, reduce_columns
from simplex_homology.reduction.indexer import IndexedFiltration, index_filtration
from simplex_homology.config import PersistenceImageConfig
from simplex_homology.utils.exceptions import InvariantViolation, ValidationError


def _significant(pairs, tol=1e-6):
    return [p for p in pairs if p.persistence > tol]


class TestUnitSquare:

    def test_single_pair(self, unit_square, square_diagonal):
        result = compute_persistence(unit_square)
        assert len(result.pairs) == 1
        pair = result.pairs[0]
        assert pair.birth == pytest.approx(1.0)
        assert pair.death == pytest.approx(square_diagonal)

    def test_witnesses(self, unit_square):
        pair = compute_persistence(unit_square).pairs[0]
        assert sorted(pair.birth_edges) == [(0, 1), (0, 3), (1, 2), (2, 3)]
        assert sorted(pair.death_triangles) == [(0, 1, 2), (0, 2, 3)]

    def test_component_pairs(self, unit_square):
        result = compute_persistence(unit_square)
        # four vertices merge into one component along three unit sides
        assert len(result.component_pairs) == 3
        assert all(cp.death == pytest.approx(1.0) for cp in result.component_pairs)
        assert all(cp.birth == 0.0 for cp in result.component_pairs)
        assert all(len(cp.edge) == 2 for cp in result.component_pairs)

    def test_to_dict_payload(self, unit_square):
        payload = compute_persistence(unit_square).to_dict()
        assert set(payload) == {"pairs", "persistenceImage"}
        pair = payload["pairs"][0]
        assert set(pair) == {"birth", "death", "birthEdges", "deathTriangles"}
        assert all(len(e) == 2 for e in pair["birthEdges"])
        assert all(len(t) == 3 for t in pair["deathTriangles"])
        assert len(payload["persistenceImage"]) == 50
        assert len(payload["persistenceImage"][0]) == 50


class TestPairValidity:

    def test_no_zero_length_pairs(self, random_cloud):
        result = compute_persistence(random_cloud)
        for p in result.pairs:
            assert p.birth != p.death
            assert p.death >= p.birth

    def test_witness_edges_form_a_cycle(self, random_cloud):
        # every vertex of a Z2 1-cycle has even degree
        for p in compute_persistence(random_cloud).pairs:
            degree = {}
            for a, b in p.birth_edges:
                degree[a] = degree.get(a, 0) + 1
                degree[b] = degree.get(b, 0) + 1
            assert all(d % 2 == 0 for d in degree.values())

    def test_death_triangles_appear_at_death(self, random_cloud):
        filt = build_rips_filtration(random_cloud)
        value_of = {t: v for v, lvl in filt.items() for t in lvl.triangles}
        for p in compute_persistence(random_cloud).pairs:
            assert p.death_triangles
            assert max(value_of[t] for t in p.death_triangles) == p.death

    def test_diagram_shape(self, random_cloud):
        result = compute_persistence(random_cloud)
        dgm = result.diagram()
        assert dgm.shape == (len(result.pairs), 2)
        assert np.allclose(result.persistence_values(), dgm[:, 1] - dgm[:, 0])


class TestEdgeCases:

    @pytest.mark.parametrize("points", [[], np.zeros((0, 2)), [[1.0, 2.0]], [[0.0, 0.0], [1.0, 1.0]]])
    def test_small_inputs(self, points):
        result = compute_persistence(points)
        assert result.pairs == []
        assert result.persistence_image.shape == (50, 50)
        assert np.all(result.persistence_image == 0.0)
        assert result.diagram().shape == (0, 2)

    def test_collinear_points_have_no_loops(self):
        pts = [[0.0, 0.0], [1.0, 0.0], [2.0, 0.0], [3.0, 0.0]]
        assert compute_persistence(pts).pairs == []

    def test_duplicate_points(self):
        pts = [[0.0, 0.0], [0.0, 0.0], [1.0, 0.0]]
        result = compute_persistence(pts)
        assert result.pairs == []
        # the duplicate merges at distance 0 and is not reported
        assert [cp.death for cp in result.component_pairs] == [1.0]

    def test_image_config_is_used(self, unit_square):
        cfg = PersistenceImageConfig(grid_size=8, subgrid_size=2)
        result = compute_persistence(unit_square, image_config=cfg)
        assert result.persistence_image.shape == (8, 8)
        assert result.image_config is cfg

    def test_bad_image_config(self, unit_square):
        with pytest.raises(ValidationError):
            compute_persistence(unit_square, image_config=PersistenceImageConfig(weighting="log"))


class TestCircle:

    def test_one_long_lived_loop(self, circle_cloud):
        result = compute_persistence(circle_cloud)
        pairs = _significant(result.pairs)
        assert len(pairs) == 1
        # born when the 12 sides close up, dies at the 4-step chord
        assert pairs[0].birth == pytest.approx(200.0 * np.sin(np.pi / 12), rel=1e-9)
        assert pairs[0].death == pytest.approx(200.0 * np.sin(np.pi / 3), rel=1e-9)

    def test_loop_witness_spans_circle(self, circle_cloud):
        pair = _significant(compute_persistence(circle_cloud).pairs)[0]
        verts = {v for e in pair.birth_edges for v in e}
        assert len(verts) >= 3


class TestAgainstRipser:

    def test_matches_ripser_h1(self, random_cloud):
        ripser = pytest.importorskip("ripser")
        ours = compute_persistence(random_cloud).diagram()
        ref = ripser.ripser(random_cloud, maxdim=1)["dgms"][1]

        tol = 1e-3
        ours = ours[(ours[:, 1] - ours[:, 0]) > tol]
        ref = ref[np.isfinite(ref[:, 1]) & ((ref[:, 1] - ref[:, 0]) > tol)]

        ours = ours[np.lexsort((ours[:, 1], ours[:, 0]))]
        ref = ref[np.lexsort((ref[:, 1], ref[:, 0]))]
        assert ours.shape == ref.shape
        assert np.allclose(ours, ref, atol=1e-4)


class TestExtractor:

    def test_extractor_on_prebuilt_pipeline(self, unit_square):
        indexed = index_filtration(build_rips_filtration(unit_square), 4)
        columns = indexed.columns()
        reduction = reduce_columns(columns)
        pairs, components = extract_persistence_pairs(indexed, columns, reduction)
        assert len(pairs) == 1
        assert len(components) == 3

    def test_triangle_in_birth_witness(self):
        # row 4 belongs to the triangle at position 1
        indexed = IndexedFiltration(
            n_vertices=3,
            simplices=[(0, 1), (0, 1, 2), (0, 1, 2)],
            values=[1.0, 2.0, 3.0],
        )
        columns = [
            Column(boundary={0, 1}, members={0}),
            Column(boundary=set(), members={1}),
            Column(boundary={4}, members={2}),
        ]
        reduction = ReductionResult(pivots={1: 0, 4: 2})
        with pytest.raises(InvariantViolation, match="not an edge"):
            extract_persistence_pairs(indexed, columns, reduction)

    def test_edge_in_death_witness(self):
        indexed = IndexedFiltration(
            n_vertices=3,
            simplices=[(0, 1), (0, 2), (1, 2), (0, 1, 2)],
            values=[1.0, 1.0, 1.0, 2.0],
        )
        columns = [
            Column(boundary={0, 1}, members={0}),
            Column(boundary={0, 2}, members={1}),
            Column(boundary=set(), members={0, 1, 2}),
            Column(boundary={3}, members={0, 3}),
        ]
        reduction = ReductionResult(pivots={1: 0, 2: 1, 3: 3}, zero_columns=[2])
        with pytest.raises(InvariantViolation, match="not a triangle"):
            extract_persistence_pairs(indexed, columns, reduction)
