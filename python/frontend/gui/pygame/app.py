"""Pygame GUI frontend — drag pieces with the mouse.

The board is drawn from the live game state every frame. A mouse press on
a piece starts a :class:`DragGesture`; motion events feed it pointer
coordinates and the engine decides where the piece may go. The optimal
solution is searched for in the background from the moment the window
opens; SOLVE replays it on a timer.
"""

from __future__ import annotations

import enum

import pygame

from backend.engine.gameplay import DragGesture, GamePlay, SolutionReplay
from backend.engine.gamesolver import (
    HintProvider,
    SolverConfig,
    SolverPhase,
    SolverTask,
)
from backend.models.board import Direction, Shape

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_SURFACE0 = (49, 50, 68)
COL_SURFACE1 = (69, 71, 90)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_SUBTEXT = (166, 173, 200)
COL_BLUE = (137, 180, 250)
COL_GREEN = (166, 227, 161)
COL_PINK = (245, 194, 231)
COL_YELLOW = (249, 226, 175)

_SHAPE_COL: dict[Shape, tuple[int, int, int]] = {
    Shape.BIG: COL_YELLOW,
    Shape.TALL: COL_GREEN,
    Shape.WIDE: COL_BLUE,
    Shape.SMALL: COL_PINK,
}

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 460, 640
CELL = 86
GAP = 4
BOARD_X = (WIN_W - 4 * CELL) // 2
BOARD_Y = 80
REPLAY_MS = 250


class _Screen(enum.Enum):
    PLAYING = "playing"
    WIN = "win"


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "enabled", "_hot")

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        font: pygame.font.Font,
        *,
        bg: tuple = COL_SURFACE0,
        hover: tuple = COL_SURFACE1,
        fg: tuple = COL_TEXT,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.hover = hover
        self.fg = fg
        self.enabled = True
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        if not self.enabled:
            c, fg = COL_SURFACE0, COL_OVERLAY0
        else:
            c, fg = (self.hover if self._hot else self.bg), self.fg
        pygame.draw.rect(surf, c, self.rect, border_radius=8)
        lbl = self.font.render(self.text, True, fg)
        surf.blit(
            lbl,
            (
                self.rect.centerx - lbl.get_width() // 2,
                self.rect.centery - lbl.get_height() // 2,
            ),
        )

    def motion(self, pos: tuple[int, int]) -> None:
        self._hot = self.rect.collidepoint(pos)

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.enabled and self.rect.collidepoint(pos)


def _blit_center(surf: pygame.Surface, rendered: pygame.Surface, y: int) -> None:
    surf.blit(rendered, ((WIN_W - rendered.get_width()) // 2, y))


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(self, config: SolverConfig) -> None:
        self._game = GamePlay()
        self._task = SolverTask(self._game.definition.initial_state(), config)
        self._task.start()
        self._hints = HintProvider(self._task, config)

        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Help the panda get down")
        self._clock = pygame.time.Clock()

        self._f_big = pygame.font.SysFont("Helvetica", 34, bold=True)
        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 16)
        self._f_btn = pygame.font.SysFont("Helvetica", 14, bold=True)
        self._f_piece = pygame.font.SysFont("Helvetica", 26, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)

        self._screen = _Screen.PLAYING
        self._drag: DragGesture | None = None
        self._selected: int = self._game.definition.goal_piece_id
        self._replay: SolutionReplay | None = None
        self._next_step_at = 0
        self._auto_solved = False
        self._hint_pending = False
        self._status_msg = ""

        self._build_btns()

    def _build_btns(self) -> None:
        bw, gap = 120, 10
        y = BOARD_Y + 5 * CELL + 20
        sx = (WIN_W - (3 * bw + 2 * gap)) // 2
        self._restart_btn = _Btn((sx, y, bw, 38), "RESTART (R)", self._f_btn)
        self._hint_btn = _Btn(
            (sx + bw + gap, y, bw, 38), "HINT (N)", self._f_btn,
            bg=COL_YELLOW, hover=(255, 240, 200), fg=COL_BASE,
        )
        self._solve_btn = _Btn(
            (sx + 2 * (bw + gap), y, bw, 38), "SOLVE (V)", self._f_btn,
            bg=COL_GREEN, hover=(190, 240, 190), fg=COL_BASE,
        )
        self._btns = [self._restart_btn, self._hint_btn, self._solve_btn]

        self._again_btn = _Btn(
            ((WIN_W - 220) // 2, 440, 220, 50), "PLAY AGAIN", self._f_btn,
            bg=COL_GREEN, hover=(190, 240, 190), fg=COL_BASE,
        )

    # ── geometry ────────────────────────────────────────────────────────────

    @staticmethod
    def _cell_at(pos: tuple[int, int]) -> tuple[int, int] | None:
        """Board cell (1-indexed) under a window position."""
        x, y = pos
        if x < BOARD_X or y < BOARD_Y:
            return None
        row = (y - BOARD_Y) // CELL + 1
        col = (x - BOARD_X) // CELL + 1
        if row > 5 or col > 4:
            return None
        return row, col

    def _piece_rect(self, pid: int) -> pygame.Rect:
        board = self._game.state.board
        p = board.placement(pid)
        shape = self._game.definition.piece(pid).shape
        return pygame.Rect(
            BOARD_X + (p.col - 1) * CELL + GAP,
            BOARD_Y + (p.row - 1) * CELL + GAP,
            shape.cols * CELL - 2 * GAP,
            shape.rows * CELL - 2 * GAP,
        )

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw_game(self) -> None:
        self._surf.fill(COL_BASE)
        game = self._game
        d = game.definition

        _blit_center(
            self._surf,
            self._f_title.render("Help the panda get down", True, COL_TEXT),
            14,
        )
        _blit_center(
            self._surf,
            self._f_body.render(
                f"Moves: {game.state.moves}    "
                f"Time: {self._fmt(game.state.elapsed_time)}",
                True,
                COL_PINK,
            ),
            46,
        )

        pygame.draw.rect(
            self._surf,
            COL_MANTLE,
            pygame.Rect(BOARD_X, BOARD_Y, d.cols * CELL, d.rows * CELL),
            border_radius=10,
        )
        # exit marker under the target footprint
        goal = d.piece(d.goal_piece_id).shape
        pygame.draw.rect(
            self._surf,
            COL_SURFACE0,
            pygame.Rect(
                BOARD_X + (d.target.col - 1) * CELL,
                BOARD_Y + (d.target.row - 1) * CELL,
                goal.cols * CELL,
                goal.rows * CELL,
            ),
            width=2,
            border_radius=10,
        )

        for pid in d.piece_ids:
            rect = self._piece_rect(pid)
            shape = d.piece(pid).shape
            pygame.draw.rect(self._surf, _SHAPE_COL[shape], rect, border_radius=8)
            if pid == self._selected:
                pygame.draw.rect(self._surf, COL_TEXT, rect, width=3, border_radius=8)
            lbl = self._f_piece.render(str(pid), True, COL_BASE)
            self._surf.blit(
                lbl,
                (
                    rect.centerx - lbl.get_width() // 2,
                    rect.centery - lbl.get_height() // 2,
                ),
            )

        self._solve_btn.enabled = self._task.phase is SolverPhase.SOLVED
        self._hint_btn.enabled = self._replay is None and not self._hint_pending
        for btn in self._btns:
            btn.draw(self._surf)

        btn_y = self._restart_btn.rect.bottom
        _blit_center(
            self._surf,
            self._f_small.render(self._solver_text(), True, COL_SUBTEXT),
            btn_y + 12,
        )
        if self._status_msg:
            _blit_center(
                self._surf,
                self._f_small.render(self._status_msg, True, COL_YELLOW),
                btn_y + 32,
            )
        _blit_center(
            self._surf,
            self._f_small.render(
                "Drag pieces     1-9 0 select     Arrows / WASD  move     Esc  quit",
                True,
                COL_OVERLAY0,
            ),
            WIN_H - 28,
        )

    def _draw_win(self) -> None:
        self._surf.fill(COL_BASE)
        game = self._game

        _blit_center(
            self._surf,
            self._f_big.render("★  S O L V E D  ★", True, COL_GREEN),
            120,
        )
        y = 220
        for txt in (
            f"Moves:  {game.state.moves}",
            f"Time:   {self._fmt(game.state.elapsed_time)}",
        ):
            _blit_center(self._surf, self._f_title.render(txt, True, COL_YELLOW), y)
            y += 44

        self._again_btn.draw(self._surf)

    def _solver_text(self) -> str:
        phase = self._task.phase
        result = self._task.result
        if phase is SolverPhase.SOLVED and result is not None:
            return f"Solver ready: {len(result)} moves"
        if phase is SolverPhase.FAILED and result is not None:
            return f"Solver failed ({result.status.value})"
        return "Solver searching…"

    @staticmethod
    def _fmt(seconds: float) -> str:
        m, s = divmod(int(seconds), 60)
        return f"{m:02d}:{s:02d}"

    # ── event handling ──────────────────────────────────────────────────────

    def _ev_game(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            for btn in self._btns:
                btn.motion(ev.pos)
            if self._drag is not None:
                self._drag.update(*ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._restart_btn.hit(ev.pos):
                self._restart()
            elif self._hint_btn.hit(ev.pos):
                self._do_hint()
            elif self._solve_btn.hit(ev.pos):
                self._do_solve()
            elif self._replay is None:
                self._start_drag(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONUP and ev.button == 1:
            if self._drag is not None and self._drag.moved:
                self._status_msg = ""
            self._drag = None
        elif ev.type == pygame.KEYDOWN:
            _dirs = {
                pygame.K_UP: Direction.UP,
                pygame.K_w: Direction.UP,
                pygame.K_DOWN: Direction.DOWN,
                pygame.K_s: Direction.DOWN,
                pygame.K_LEFT: Direction.LEFT,
                pygame.K_a: Direction.LEFT,
                pygame.K_RIGHT: Direction.RIGHT,
                pygame.K_d: Direction.RIGHT,
            }
            dragging = self._drag is not None
            if ev.key in _dirs and self._replay is None and not dragging:
                self._game.move(self._selected, _dirs[ev.key])
            elif pygame.K_0 <= ev.key <= pygame.K_9:
                pid = (ev.key - pygame.K_0) or 10
                if pid in self._game.definition.piece_ids:
                    self._selected = pid
            elif ev.key == pygame.K_n and not dragging:
                self._do_hint()
            elif ev.key == pygame.K_v and not dragging:
                self._do_solve()
            elif ev.key == pygame.K_r:
                self._restart()
            elif ev.key == pygame.K_ESCAPE:
                return False
        return True

    def _ev_win(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            self._again_btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._again_btn.hit(ev.pos):
                self._restart()
        elif ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_r, pygame.K_RETURN):
                self._restart()
            elif ev.key == pygame.K_ESCAPE:
                return False
        return True

    def _start_drag(self, pos: tuple[int, int]) -> None:
        cell = self._cell_at(pos)
        if cell is None:
            return
        pid = self._game.piece_at(*cell)
        if pid is None:
            return
        self._selected = pid
        self._drag = DragGesture(self._game, pid, pos[0], pos[1], CELL)

    # ── solver actions ──────────────────────────────────────────────────────

    def _do_hint(self) -> None:
        board = self._game.state.board
        self._hint_pending = False
        if self._replay is not None or board.is_solved():
            return
        move = self._hints.ask(board)
        self._hint_pending = move is None and self._hints.searching
        if self._hint_pending:
            self._status_msg = "Thinking…"
            return
        if move is None:
            self._status_msg = "No hint available from here"
            return
        self._game.apply(move)
        self._selected = move.piece_id
        self._status_msg = f"Hint: {move}"

    def _tick_hint(self) -> None:
        if self._hint_pending and not self._hints.searching:
            self._do_hint()

    def _do_solve(self) -> None:
        result = self._task.result
        if self._task.phase is not SolverPhase.SOLVED or result is None:
            return
        self._drag = None
        self._replay = SolutionReplay(self._game, result.moves)
        self._next_step_at = pygame.time.get_ticks() + REPLAY_MS
        self._status_msg = f"Replaying… 0/{self._replay.total}"

    def _tick_replay(self) -> None:
        replay = self._replay
        if replay is None or pygame.time.get_ticks() < self._next_step_at:
            return
        move = replay.step()
        if move is not None:
            self._selected = move.piece_id
            self._status_msg = f"Replaying… {replay.position}/{replay.total}"
            self._next_step_at += REPLAY_MS
        if replay.done:
            self._status_msg = f"Solved in {replay.total} moves!"
            self._replay = None
            self._auto_solved = True

    # ── game state ──────────────────────────────────────────────────────────

    def _restart(self) -> None:
        self._game.reset()
        self._drag = None
        self._replay = None
        self._auto_solved = False
        self._hint_pending = False
        self._status_msg = ""
        self._screen = _Screen.PLAYING

    def _check_win(self) -> None:
        # A replayed solution ends on the goal too; only a win by hand counts.
        if self._replay is not None or self._drag is not None:
            return
        if self._auto_solved:
            return
        if self._game.is_won:
            self._game.state.pause()
            self._screen = _Screen.WIN

    # ── main loop ───────────────────────────────────────────────────────────

    def run_loop(self) -> None:
        _dispatch = {
            _Screen.PLAYING: self._ev_game,
            _Screen.WIN: self._ev_win,
        }
        _draw = {
            _Screen.PLAYING: self._draw_game,
            _Screen.WIN: self._draw_win,
        }

        running = True
        while running:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    running = False
                    break
                if not _dispatch[self._screen](ev):
                    running = False
                    break

            if self._screen is _Screen.PLAYING:
                self._tick_hint()
                self._tick_replay()
                self._check_win()

            _draw[self._screen]()
            pygame.display.flip()
            self._clock.tick(60)

        self._hints.cancel()
        self._task.cancel()
        pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(config: SolverConfig = SolverConfig()) -> None:
    """Launch the Pygame GUI."""
    app = PygameApp(config)
    app.run_loop()
