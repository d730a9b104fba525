"""Testes do cálculo de comprimento de corte"""

import unittest

from cutplanner.cut_length import CutLengthEstimator, build_strips
from cutplanner.models import Trim
from cutplanner.packing import Board, Rectangle


def filled_board(width, height, kerf, panels):
    board = Board(width, height, kerf)
    for panel in panels:
        assert board.insert(panel) is not None
    return board


class TestBuildStrips(unittest.TestCase):
    """Agrupamento em faixas"""

    def test_rows_are_grouped_top_to_bottom(self):
        rects = [
            Rectangle(800, 600, x=0, y=403),
            Rectangle(600, 400, x=603, y=0),
            Rectangle(600, 400, x=0, y=0),
        ]
        strips = build_strips(rects)

        self.assertEqual(len(strips), 2)
        self.assertEqual([r.x for r in strips[0].rectangles], [0, 603])
        self.assertEqual((strips[0].start, strips[0].height, strips[0].bottom), (0, 400, 400))
        self.assertEqual((strips[1].start, strips[1].bottom), (403, 1003))

    def test_nested_panels_join_their_strip(self):
        rects = [
            Rectangle(600, 600, x=0, y=0),
            Rectangle(300, 400, x=603, y=0),
            Rectangle(300, 150, x=603, y=403),
            Rectangle(900, 100, x=0, y=603),
        ]
        strips = build_strips(rects)

        self.assertEqual([len(s) for s in strips], [3, 1])
        self.assertEqual(strips[0].height, 600)

    def test_tolerance(self):
        rects = [Rectangle(100, 100, x=0, y=0), Rectangle(100, 50, x=200, y=0.5)]
        self.assertEqual(len(build_strips(rects, tolerance=1.0)), 1)

    def test_empty(self):
        self.assertEqual(build_strips([]), [])


class TestCutLengthWithoutTrim(unittest.TestCase):
    """Cortes sem refilo"""

    def setUp(self):
        self.estimator = CutLengthEstimator(tolerance=1.0)

    def test_empty_board_is_zero(self):
        self.assertEqual(self.estimator.estimate(Board(2070, 2800, 3)), 0)
        self.assertEqual(self.estimator.estimate(Board(2070, 2800, 3), Trim(top=10)), 0)

    def test_single_panel(self):
        board = filled_board(2070, 2800, 3, [Rectangle(800, 600, rotatable=True)])
        self.assertEqual(board.placed[0].width, 800)

        # Um corte vertical na altura da peça e um horizontal na largura da chapa
        self.assertEqual(self.estimator.estimate(board), 600 + 2070)

    def test_two_rows(self):
        board = filled_board(2070, 2800, 3, [
            Rectangle(600, 400, rotatable=True),
            Rectangle(600, 400, rotatable=True),
            Rectangle(800, 600, rotatable=True),
        ])
        # Faixa 1: 3 cortes de 400; faixa 2: 1 corte de 600; 2 horizontais
        self.assertEqual(self.estimator.estimate(board), 3 * 400 + 600 + 2 * 2070)

    def test_panel_filling_board_needs_no_cuts(self):
        board = filled_board(1000, 500, 3, [Rectangle(1000, 500)])
        self.assertEqual(self.estimator.estimate(board), 0)

    def test_first_gap_skipped_without_left_trim(self):
        board = Board(1000, 1000, 3)
        board.placed = [Rectangle(200, 300, x=50, y=0)]
        self.assertEqual(self.estimator.estimate(board), 300 + 1000)

    def test_stacked_column_adds_inner_horizontal_cut(self):
        board = filled_board(1000, 600, 3, [
            Rectangle(600, 600),
            Rectangle(300, 400),
            Rectangle(300, 150),
        ])
        self.assertEqual([(r.x, r.y) for r in board.placed], [(0, 0), (603, 0), (603, 403)])
        self.assertEqual(len(self.estimator.strips(board)), 1)

        # Dois verticais de 600 (x=600 e x=903), o vão do kerf e um horizontal de 300 na coluna
        self.assertEqual(self.estimator.estimate(board), 3 * 600 + 300)

    def test_zero_trim_uses_plain_path(self):
        board = filled_board(2070, 2800, 3, [Rectangle(800, 600)])
        self.assertEqual(self.estimator.estimate(board, Trim()), self.estimator.estimate(board))

    def test_idempotent(self):
        board = filled_board(2070, 2800, 3, [Rectangle(600, 400)] * 5 + [Rectangle(1200, 900)])
        first = self.estimator.estimate(board)
        self.assertEqual(self.estimator.estimate(board), first)
        self.assertEqual(len(board.placed), 6)

    def test_estimate_many(self):
        boards = [
            filled_board(2070, 2800, 3, [Rectangle(800, 600)]),
            Board(2070, 2800, 3),
        ]
        self.assertEqual(self.estimator.estimate_many(boards), [2670, 0])


class TestCutLengthWithTrim(unittest.TestCase):
    """Cortes com refilo e correções calibradas"""

    def setUp(self):
        self.estimator = CutLengthEstimator(tolerance=1.0)
        self.trim = Trim(top=10, right=10, bottom=10, left=10)

    def panels(self, count):
        # Chapa bruta 2070x2800 menos 10 mm de cada borda
        return filled_board(2050, 2780, 3, [Rectangle(800, 600) for _ in range(count)])

    def test_single_panel(self):
        board = self.panels(1)
        # topo + vertical + vertical extra + horizontal final + (2200 - 1070)
        self.assertEqual(self.estimator.estimate(board, self.trim), 2070 + 600 + 600 + 2070 + 1130)

    def test_two_panels(self):
        board = self.panels(2)
        self.assertEqual(self.estimator.estimate(board, self.trim), 2070 + 3 * 600 + 2070 + 1130)

    def test_grid_of_four_panels(self):
        board = self.panels(4)
        self.assertEqual([(r.x, r.y) for r in board.placed], [(0, 0), (803, 0), (0, 603), (803, 603)])
        self.assertEqual(self.estimator.estimate(board, self.trim), 14400)

    def test_three_panels_use_small_layout_correction(self):
        board = self.panels(3)
        # Faixa 1: 3 cortes de 600; faixa 2 (peça única): 2 cortes de 600
        expected = 2 * 2070 + 5 * 600 + 2070 + (2800 - 1203 - 1070)
        self.assertEqual(self.estimator.estimate(board, self.trim), expected)

    def test_no_top_trim_skips_first_horizontal(self):
        board = self.panels(1)
        trim = Trim(right=10, bottom=20, left=10)
        self.assertEqual(self.estimator.estimate(board, trim), 600 + 600 + 2070 + (2800 - 600 - 1070))

    def test_stacked_column_with_trim(self):
        board = filled_board(1000, 600, 3, [
            Rectangle(600, 600),
            Rectangle(300, 400),
            Rectangle(300, 150),
        ])
        # Chapa bruta 1020x620: topo + (3 * 600 + 300) + horizontal final + (20 - 1070)
        self.assertEqual(self.estimator.estimate(board, self.trim), 1020 + 2100 + 1020 + (20 - 1070))

    def test_left_trim_cuts_first_gap(self):
        board = Board(1000, 1000, 3)
        board.placed = [Rectangle(200, 300, x=50, y=0)]
        self.assertEqual(self.estimator.estimate(board, Trim(left=5)), 3 * 300 + 1005 + (1000 - 300 - 1070))


if __name__ == "__main__":
    unittest.main()
