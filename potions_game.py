import argparse
import random
import sys
from typing import Dict, List, Optional, Sequence, Tuple

import pygame

from potions import CAPACITY, N_POTIONS, RANDOM_SEED, Potion, PotionsGameModel, all_done, click_potion

# ===================== 窗口与布局 ===================== #
WINDOW_W, WINDOW_H = 800, 600
COLS = 6                 # 每行 6 个瓶子，默认 18 瓶 = 3 行

TILE_W, TILE_H = 36, 86  # 瓶子命中区域
H_STEP = 70              # 相邻两列左边缘的距离
V_STEP = 100             # 相邻两行上边缘的距离
PADDING = 6
LIQ_INSET = 6            # 液体左右内缩
LIFT_OFFSET = -10        # 选中时抬起
MAX_ROWS = 4             # 居中后 4 行仍在窗口内且不压住底部按钮
MAX_POTIONS = COLS * MAX_ROWS

# 新一局按钮（底部居中）：x, y, w, h
BTN_W, BTN_H = 140, 40
BTN_NEW = (WINDOW_W // 2 - BTN_W // 2, WINDOW_H - 16 - BTN_H, BTN_W, BTN_H)

# ===================== 颜色与样式 ===================== #
BG_COLOR = (60, 40, 40)
BORDER_COLOR = (220, 220, 220)
TEXT_COLOR = (240, 240, 240)
CLOSED_TINT = (70, 90, 70)
BTN_BG = (235, 240, 255)
BTN_BORDER = (120, 140, 200)

LIQUID_COLORS = {
    1: (80, 80, 150),
    2: (150, 50, 50),
    3: (50, 150, 50),
    4: (200, 200, 0),
}
UNKNOWN_COLOR = (255, 255, 255)


def color_from_id(color_id: int) -> Tuple[int, int, int]:
    return LIQUID_COLORS.get(color_id, UNKNOWN_COLOR)


# ---------- 布局：第 i 个瓶子位于 (i // COLS 行, i % COLS 列)，整体居中 ---------- #
def grid_layout(n: int) -> List[Dict[str, int]]:
    """返回每个瓶子的左上角坐标 [{"idx", "x", "y"}, ...]，不依赖显示窗口。"""
    if n <= 0:
        return []
    cols = min(n, COLS)
    rows = (n + COLS - 1) // COLS
    grid_w = (cols - 1) * H_STEP + TILE_W + 2 * PADDING
    grid_h = (rows - 1) * V_STEP + TILE_H + 2 * PADDING
    left = (WINDOW_W - grid_w) // 2 + PADDING
    top = (WINDOW_H - grid_h) // 2 + PADDING

    positions = []
    for i in range(n):
        r, c = divmod(i, COLS)
        positions.append({"idx": i, "x": left + c * H_STEP, "y": top + r * V_STEP})
    return positions


def hit_test(pos: Tuple[int, int], positions: Sequence[Dict[str, int]]) -> Optional[int]:
    for d in positions:
        rect = pygame.Rect(d["x"], d["y"], TILE_W, TILE_H)
        if rect.collidepoint(pos):
            return d["idx"]
    return None


class View:
    def __init__(self, game: PotionsGameModel):
        pygame.init()
        self.game = game
        self.screen = pygame.display.set_mode((WINDOW_W, WINDOW_H))
        pygame.display.set_caption("Potions")
        self.font = pygame.font.SysFont(None, 24)
        self.solved_reported = False

        self.btn_new_rect = pygame.Rect(BTN_NEW)

    def new_game(self):
        """重新发一局（瓶子数不变，沿用同一个随机源）。"""
        self.game = PotionsGameModel(len(self.game.potions), rng=self.game.rng)
        self.solved_reported = False
        print("[INFO] new game dealt")

    def run(self):
        # 事件驱动：只在有事件时处理并重绘
        self._draw()
        while True:
            event = pygame.event.wait()
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_click(event.pos)
            self._draw()

    def _handle_click(self, pos):
        if self.btn_new_rect.collidepoint(pos):
            self.new_game(); return

        idx = hit_test(pos, grid_layout(len(self.game.potions)))
        if idx is None:
            return
        click_potion(self.game, idx)
        if not self.solved_reported and all_done(self.game.potions):
            self.solved_reported = True
            print("[INFO] all potions closed or empty")

    def _draw_liquid_layers(self, x: int, y: int, potion: Potion):
        slot_h = (TILE_H - 2 * PADDING) // CAPACITY
        base_x = x + LIQ_INSET
        draw_w = max(1, TILE_W - 2 * LIQ_INSET)
        bottom = y + TILE_H - PADDING
        for i, color_id in enumerate(potion.contents):
            # 自底向上绘制
            top_y = bottom - (i + 1) * slot_h
            pygame.draw.rect(self.screen, color_from_id(color_id), pygame.Rect(base_x, top_y, draw_w, slot_h))

    def _draw_potion(self, potion: Potion, x: int, y: int):
        rect = pygame.Rect(x, y, TILE_W, TILE_H)
        if potion.is_closed():
            pygame.draw.rect(self.screen, CLOSED_TINT, rect, border_radius=6)

        self._draw_liquid_layers(x, y, potion)
        pygame.draw.rect(self.screen, BORDER_COLOR, rect, width=2, border_radius=6)

        if potion.is_closed():
            done_text = self.font.render("Ready!", True, (120, 220, 120))
            self.screen.blit(done_text, (x + TILE_W // 2 - done_text.get_width() // 2, y - 20))

    def _draw(self):
        self.screen.fill(BG_COLOR)

        status = "Solved!" if all_done(self.game.potions) else f"{len(self.game.potions)} potions"
        txt = self.font.render(status, True, TEXT_COLOR)
        self.screen.blit(txt, (16, 16))

        for d, p in zip(grid_layout(len(self.game.potions)), self.game.potions):
            lift = LIFT_OFFSET if p.is_selected else 0
            self._draw_potion(p, d["x"], d["y"] + lift)

        pygame.draw.rect(self.screen, BTN_BG, self.btn_new_rect, border_radius=10)
        pygame.draw.rect(self.screen, BTN_BORDER, self.btn_new_rect, width=2, border_radius=10)
        new_txt = self.font.render("New game", True, (20, 40, 80))
        self.screen.blit(new_txt, (self.btn_new_rect.centerx - new_txt.get_width() // 2,
                                   self.btn_new_rect.centery - new_txt.get_height() // 2))

        pygame.display.flip()


# ===================== 入口 ===================== #
def main(argv=None):
    parser = argparse.ArgumentParser(description="Potions: merge matching liquids until every potion is closed")
    parser.add_argument("--potions", type=int, default=N_POTIONS, help="Number of potions in the game")
    parser.add_argument("--seed", type=int, default=RANDOM_SEED, help="RNG seed for the deal")
    args = parser.parse_args(argv)
    if args.potions < 1:
        parser.error("--potions must be at least 1")
    if args.potions > MAX_POTIONS:
        parser.error(f"--potions must be at most {MAX_POTIONS} to fit the window")

    print(f"[INFO] dealing {args.potions} potions (seed={args.seed})")
    game = PotionsGameModel(args.potions, rng=random.Random(args.seed))
    view = View(game)
    view.run()


if __name__ == "__main__":
    main()
