"""
Tests for the TicTacToe agent engine modules.
Covers boards, win detection, leaf scoring, tree building and pruning.

Run with: pytest test_modules.py
"""

import pytest

from engine.board import Board, Token, WINNING_LINES
from engine.config import EngineConfig
from engine.game_tree import GameTreeNode, TreeBuilder
from engine.leaf_scorer import LeafScorer
from engine.pruning import Bounds, DesirableSet, PruningEngine
from engine.win_detector import WinDetector


X = Token.X
O = Token.O


class RecordingChoice:
    """Tie-break function that remembers the last candidates it saw."""

    def __init__(self, pick_last: bool = False):
        self.pick_last = pick_last
        self.last = None
        self.calls = 0

    def __call__(self, candidates):
        self.calls += 1
        self.last = list(candidates)
        return candidates[-1] if self.pick_last else candidates[0]


class TableScorer:
    """Scores leaves from a fixed board -> value table."""

    def __init__(self, table):
        self.table = table

    def score(self, board, perspective):
        return self.table[board]


def _board_with(*moves):
    board = Board.empty()
    for row, col, token in moves:
        board = board.with_move(row, col, token)
    return board


# ==================== BOARD ====================

class TestBoard:

    def test_empty_board_has_nine_cells_in_row_major_order(self):
        cells = Board.empty().empty_cells()
        assert cells == [(r, c) for r in range(3) for c in range(3)]

    def test_from_rows_parses_characters(self):
        board = Board.from_rows(["xo.", " _o", ["", None, X]])
        assert board.cell(0, 0) == X
        assert board.cell(0, 1) == O
        assert board.cell(0, 2) is None
        assert board.cell(1, 2) == O
        assert board.cell(2, 2) == X
        assert board.count(X) == 2
        assert board.count(O) == 2

    def test_from_rows_rejects_bad_shape_and_values(self):
        with pytest.raises(ValueError):
            Board.from_rows(["xo", "...", "..."])
        with pytest.raises(ValueError):
            Board.from_rows(["xq.", "...", "..."])

    def test_with_move_leaves_original_untouched(self):
        board = Board.from_rows(["x..", "...", "..."])
        child = board.with_move(1, 1, O)

        assert board.cell(1, 1) is None
        assert child.cell(1, 1) == O
        assert child.cell(0, 0) == X
        assert len(child.empty_cells()) == len(board.empty_cells()) - 1

    def test_with_move_rejects_occupied_and_out_of_range(self):
        board = Board.from_rows(["x..", "...", "..."])
        with pytest.raises(ValueError):
            board.with_move(0, 0, O)
        with pytest.raises(ValueError):
            board.with_move(3, 0, O)

    def test_full_board(self):
        assert Board.from_rows(["xox", "xoo", "oxx"]).is_full()
        assert not Board.empty().is_full()

    def test_render_shows_tokens(self):
        text = Board.from_rows(["x..", ".o.", "..."]).render()
        assert "X" in text
        assert "O" in text

    def test_token_opposite(self):
        assert X.opposite() == O
        assert O.opposite() == X


# ==================== WIN DETECTOR ====================

class TestWinDetector:

    @pytest.mark.parametrize("line", WINNING_LINES)
    def test_each_line_filled_by_one_token_is_found(self, line):
        detector = WinDetector()
        board = _board_with(*[(r, c, O) for r, c in line])

        assert detector.find_wins(board) == [line]
        assert detector.check_winner(board) == O

    @pytest.mark.parametrize("line", WINNING_LINES)
    def test_mixed_tokens_on_a_line_do_not_win(self, line):
        detector = WinDetector()
        (r0, c0), (r1, c1), (r2, c2) = line
        board = _board_with((r0, c0, X), (r1, c1, O), (r2, c2, X))

        assert line not in detector.find_wins(board)

    def test_empty_board_has_no_wins(self):
        detector = WinDetector()
        assert detector.find_wins(Board.empty()) == []
        assert detector.check_winner(Board.empty()) is None

    def test_synthetic_board_with_two_wins(self):
        detector = WinDetector()
        board = Board.from_rows(["xxx", "x..", "x.."])
        wins = detector.find_wins(board)

        assert len(wins) == 2
        assert ((0, 0), (0, 1), (0, 2)) in wins
        assert ((0, 0), (1, 0), (2, 0)) in wins

    def test_draw_and_game_over(self):
        detector = WinDetector()
        draw = Board.from_rows(["xox", "xoo", "oxx"])
        won = Board.from_rows(["ooo", "xx.", "x.."])
        ongoing = Board.from_rows(["x..", ".o.", "..."])

        assert detector.is_draw(draw)
        assert detector.is_game_over(draw)
        assert not detector.is_draw(won)
        assert detector.is_game_over(won)
        assert not detector.is_game_over(ongoing)

    def test_custom_lines(self):
        rows_only = WinDetector(WINNING_LINES[:3])
        board = Board.from_rows(["x..", "x..", "x.."])
        assert rows_only.find_wins(board) == []


# ==================== LEAF SCORER ====================

class TestLeafScorer:

    def test_empty_board_scores_zero(self):
        scorer = LeafScorer()
        assert scorer.totals(Board.empty()) == {X: 0, O: 0}
        assert scorer.score(Board.empty(), X) == 0

    def test_center_counts_on_four_lines(self):
        scorer = LeafScorer()
        board = Board.from_rows(["...", ".x.", "..."])

        assert scorer.totals(board) == {X: 4, O: 0}
        assert scorer.score(board, X) == 4
        assert scorer.score(board, O) == -4

    def test_corner_counts_on_three_lines(self):
        scorer = LeafScorer()
        board = Board.from_rows(["o..", "...", "..."])
        assert scorer.totals(board) == {X: 0, O: 3}

    def test_contested_lines_count_for_nobody(self):
        scorer = LeafScorer()
        board = Board.from_rows(["xo.", "...", "..."])
        # X keeps col 0 and the diagonal, O keeps col 1; row 0 is shared
        assert scorer.totals(board) == {X: 2, O: 1}

    def test_completed_line_gets_bonus(self):
        scorer = LeafScorer()
        board = Board.from_rows(["xxx", "oo.", "..."])

        # Row 0: 3 + 2 bonus, col 2: 1, 4 empty cells * 20. Row 1: 2 for O
        assert scorer.totals(board) == {X: 86, O: 2}
        assert scorer.score(board, X) == 84
        assert scorer.score(board, O) == -84

    def test_full_won_board_has_no_empty_cell_points(self):
        scorer = LeafScorer()
        board = Board.from_rows(["xxx", "oox", "oxo"])
        assert scorer.totals(board) == {X: 5, O: 0}

    def test_quicker_win_scores_higher(self):
        scorer = LeafScorer()
        quick = Board.from_rows(["xxx", "...", "..."])
        slow = Board.from_rows(["xxx", "oox", "o.."])
        assert scorer.score(quick, X) > scorer.score(slow, X) > 0

    def test_bonus_comes_from_config(self):
        class NoBonus(EngineConfig):
            COMPLETED_LINE_BONUS = 0
            EMPTY_CELL_BONUS = 0

        class NoEmptyCellBonus(EngineConfig):
            EMPTY_CELL_BONUS = 0

        board = Board.from_rows(["xxx", "oo.", "..."])
        assert LeafScorer(config=NoBonus()).totals(board) == {X: 4, O: 2}
        assert LeafScorer(config=NoEmptyCellBonus()).totals(board) == {X: 6, O: 2}

    def test_full_draw_scores_zero(self):
        scorer = LeafScorer()
        board = Board.from_rows(["xox", "xoo", "oxx"])
        assert scorer.totals(board) == {X: 0, O: 0}

    @pytest.mark.parametrize("rows", [
        ["xxx", "oo.", "o.."],
        ["x.o", "xo.", "o.x"],
        ["oxx", "xo.", "x.o"],
        ["xo.", "xo.", ".o."],
    ])
    def test_won_boards_favour_the_winner(self, rows):
        scorer = LeafScorer()
        board = Board.from_rows(rows)
        winner = WinDetector().check_winner(board)

        assert winner is not None
        assert scorer.score(board, winner) > 0
        assert scorer.score(board, winner.opposite()) < 0


# ==================== TREE BUILDER ====================

class TestTreeBuilder:

    def _expand(self, rows, token):
        builder = TreeBuilder(WinDetector().find_wins)
        root = GameTreeNode(Board.from_rows(rows))
        builder.expand(root, token)
        return root, builder

    def test_won_board_is_terminal(self):
        root, builder = self._expand(["xxx", "oo.", "..."], O)
        assert root.is_leaf
        assert builder.nodes_built == 0

    def test_full_board_is_terminal(self):
        root, _ = self._expand(["xox", "xoo", "oxx"], X)
        assert root.is_leaf

    def test_children_follow_row_major_order(self):
        root, _ = self._expand(["xo.", "ox.", "..."], X)
        moves = [child.incoming_move for child in root.children]
        assert moves == [(0, 2), (1, 2), (2, 0), (2, 1), (2, 2)]

    def test_child_differs_from_parent_by_one_cell(self):
        root, _ = self._expand(["xo.", "ox.", "..."], X)
        for child in root.children:
            row, col = child.incoming_move
            assert child.board.cell(row, col) == X
            assert root.board.cell(row, col) is None
            assert child.board.count(X) == root.board.count(X) + 1
            assert child.board.count(O) == root.board.count(O)

    def test_winning_child_is_not_expanded(self):
        root, _ = self._expand(["xo.", "ox.", "..."], X)
        diagonal_win = root.children[4]
        assert diagonal_win.incoming_move == (2, 2)
        assert diagonal_win.is_leaf

    def test_tokens_alternate_by_level(self):
        root, _ = self._expand(["xo.", "ox.", "..."], X)
        child = root.children[0]
        grandchild = child.children[0]
        row, col = grandchild.incoming_move
        assert grandchild.board.cell(row, col) == O

    def test_root_board_is_not_modified(self):
        rows = ["x..", ".o.", "..."]
        original = Board.from_rows(rows)
        root, _ = self._expand(rows, X)
        assert root.board == original

    def test_node_count(self):
        root, builder = self._expand(["xo.", "ox.", "..."], X)
        assert builder.nodes_built == root.size() - 1

    def test_last_empty_cell_gives_single_leaf(self):
        root, _ = self._expand(["xox", "xoo", "ox."], X)
        assert len(root.children) == 1
        assert root.children[0].is_leaf


# ==================== PRUNING ENGINE ====================

class TestDesirableSet:

    def test_minimize_keeps_lowest_values(self):
        desirable = DesirableSet(minimize=True)
        for index, value in enumerate([3, 1, 2, 1]):
            desirable.offer(index, value)
        assert desirable.best == 1
        assert desirable.indices == [1, 3]

    def test_maximize_keeps_highest_values(self):
        desirable = DesirableSet(minimize=False)
        for index, value in enumerate([3, 1, 5, 5, 4]):
            desirable.offer(index, value)
        assert desirable.best == 5
        assert desirable.indices == [2, 3]


class TestPruningEngine:

    def test_leaf_takes_score_and_incoming_move(self):
        board = Board.from_rows(["xxx", "oo.", "..."])
        node = GameTreeNode(board, (0, 2))
        engine = PruningEngine(LeafScorer(), O)

        engine.resolve(node, Bounds(), minimize=False)

        assert node.lower_bound == node.upper_bound == -84
        assert node.chosen_move == (0, 2)

    def test_ties_are_collected_and_chosen_from(self):
        boards = [Board.empty().with_move(0, i, X) for i in range(3)]
        scorer = TableScorer({boards[0]: 3, boards[1]: 1, boards[2]: 1})
        root = GameTreeNode(Board.empty())
        root.children = [GameTreeNode(b, (0, i)) for i, b in enumerate(boards)]

        choice = RecordingChoice(pick_last=True)
        PruningEngine(scorer, O, choose=choice).resolve(root)

        assert choice.last == [1, 2]
        assert root.chosen_move == (0, 2)
        assert root.lower_bound == root.upper_bound == 1

    def test_maximize_picks_highest(self):
        boards = [Board.empty().with_move(1, i, X) for i in range(3)]
        scorer = TableScorer({boards[0]: 3, boards[1]: 1, boards[2]: 2})
        root = GameTreeNode(Board.empty())
        root.children = [GameTreeNode(b, (1, i)) for i, b in enumerate(boards)]

        PruningEngine(scorer, O).resolve(root, None, minimize=False)

        assert root.chosen_move == (1, 0)
        assert root.value == 3

    def _cutoff_tree(self):
        empty = Board.empty()
        a1 = empty.with_move(0, 0, X)
        b1 = empty.with_move(0, 1, X)
        b2 = empty.with_move(0, 2, X)
        scorer = TableScorer({a1: 2, b1: 5, b2: 1})

        root = GameTreeNode(empty)
        a = GameTreeNode(a1, (1, 0))
        a.children = [GameTreeNode(a1, (0, 0))]
        b = GameTreeNode(b1, (1, 1))
        b.children = [GameTreeNode(b1, (0, 1)), GameTreeNode(b2, (0, 2))]
        root.children = [a, b]
        return root, scorer

    def test_cutoff_skips_remaining_siblings(self):
        root, scorer = self._cutoff_tree()
        engine = PruningEngine(scorer, O)
        engine.resolve(root)

        # b's first reply (5) beats what the root already has (2)
        skipped = root.children[1].children[1]
        assert skipped.lower_bound == float('-inf')
        assert skipped.chosen_move is None
        assert engine.nodes_resolved == 5
        assert root.value == 2
        assert root.chosen_move == (1, 0)

    def test_no_cutoff_without_pruning(self):
        root, scorer = self._cutoff_tree()
        engine = PruningEngine(scorer, O, pruning=False)
        engine.resolve(root)

        assert engine.nodes_resolved == 6
        assert root.value == 2
        assert root.chosen_move == (1, 0)

    def test_no_cutoff_at_the_root(self):
        empty = Board.empty()
        boards = [empty.with_move(2, i, O) for i in range(3)]
        scorer = TableScorer({boards[0]: -9, boards[1]: -9, boards[2]: -9})
        root = GameTreeNode(empty)
        root.children = [GameTreeNode(b, (2, i)) for i, b in enumerate(boards)]

        choice = RecordingChoice()
        engine = PruningEngine(scorer, X, choose=choice)
        engine.resolve(root)

        assert engine.nodes_resolved == 4
        assert choice.last == [0, 1, 2]

    @pytest.mark.parametrize("rows, token", [
        (["xo.", "...", "..."], X),
        (["x..", ".o.", "..x"], O),
        (["oo.", "xx.", "x.."], O),
        ([".x.", "...", "o.."], X),
        (["x.o", ".x.", "..."], O),
    ])
    def test_pruning_matches_brute_force(self, rows, token):
        board = Board.from_rows(rows)
        builder = TreeBuilder(WinDetector().find_wins)
        perspective = token.opposite()

        full_root = GameTreeNode(board)
        builder.expand(full_root, token)
        full_choice = RecordingChoice()
        full = PruningEngine(LeafScorer(), perspective, choose=full_choice, pruning=False)
        full.resolve(full_root)
        optimal_moves = [full_root.children[i].incoming_move for i in full_choice.last]

        pruned_root = GameTreeNode(board)
        builder.expand(pruned_root, token)
        pruned = PruningEngine(LeafScorer(), perspective, pruning=True)
        pruned.resolve(pruned_root)

        assert pruned_root.value == full_root.value
        assert pruned_root.chosen_move in optimal_moves
        assert pruned.nodes_resolved <= full.nodes_resolved

    def test_pruning_visits_fewer_nodes(self):
        board = Board.from_rows(["xo.", "...", "..."])
        builder = TreeBuilder(WinDetector().find_wins)
        visited = {}
        for pruning in (True, False):
            root = GameTreeNode(board)
            builder.expand(root, X)
            engine = PruningEngine(LeafScorer(), O, pruning=pruning)
            engine.resolve(root)
            visited[pruning] = engine.nodes_resolved

        assert visited[True] < visited[False]
