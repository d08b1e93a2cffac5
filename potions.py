import random
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

# ===================== 可调参数 ===================== #
CAPACITY = 4            # 每瓶最多 4 格液体
N_COLORS = 4            # 非空颜色数量：颜色 id 为 1..N_COLORS
EMPTY = 0               # 空位颜色 id（不会出现在 contents 中）
N_POTIONS = 18          # 默认瓶子数（3 行 x 6 列）
RANDOM_SEED = None      # 设为整数以复现同一局，如 42

# 初始液体层数 k 的分布：截断几何分布
#   P(k) = (3/4)^k * (1/4)   (k < CAPACITY)
#   P(CAPACITY) = (3/4)^CAPACITY
STOP_CHANCE = 0.25
FILL_LEVEL_WEIGHTS = [
    (1 - STOP_CHANCE) ** k * STOP_CHANCE for k in range(CAPACITY)
] + [(1 - STOP_CHANCE) ** CAPACITY]


# ===================== 瓶子 ===================== #
@dataclass(eq=False)
class Potion:
    contents: List[int] = field(default_factory=list)  # 自底向上；最后一个元素为顶部
    is_selected: bool = False

    def __post_init__(self):
        self.contents = list(self.contents)
        if len(self.contents) > CAPACITY:
            raise ValueError(f"potion holds at most {CAPACITY} units, got {len(self.contents)}")
        for c in self.contents:
            if not EMPTY < c <= N_COLORS:
                raise ValueError(f"invalid liquid color id: {c!r}")

    @classmethod
    def generate(cls, rng: random.Random) -> "Potion":
        """按截断几何分布随机生成初始液体。

        先抽层数 k（见 FILL_LEVEL_WEIGHTS），再为每层独立均匀抽一个颜色。
        可能生成空瓶，也不保证 4 层同色。
        """
        k = rng.choices(range(CAPACITY + 1), weights=FILL_LEVEL_WEIGHTS)[0]
        return cls(contents=[rng.randint(1, N_COLORS) for _ in range(k)])

    # ---------- 读状态 ---------- #
    def fill_level(self) -> int:
        return len(self.contents)

    def is_empty(self) -> bool:
        return not self.contents

    def free_space(self) -> int:
        return CAPACITY - len(self.contents)

    def top_color(self) -> Optional[int]:
        return self.contents[-1] if self.contents else None

    def top_block_size(self) -> int:
        # 顶部连续同色块的尺寸（0 表示空）
        if not self.contents:
            return 0
        color = self.contents[-1]
        size = 0
        for c in reversed(self.contents):
            if c != color:
                break
            size += 1
        return size

    def is_closed(self) -> bool:
        # 满且颜色相同 = 已完成（封瓶）
        if len(self.contents) != CAPACITY:
            return False
        first = self.contents[0]
        return all(c == first for c in self.contents)


# ===================== 游戏模型 ===================== #
class PotionsGameModel:
    def __init__(self, n_potions: int = N_POTIONS, seed: Optional[int] = RANDOM_SEED,
                 rng: Optional[random.Random] = None):
        if n_potions < 1:
            raise ValueError(f"need at least one potion, got {n_potions}")
        self.rng = rng if rng is not None else random.Random(seed)
        self.potions: List[Potion] = [Potion.generate(self.rng) for _ in range(n_potions)]
        self.selected: Optional[int] = None  # 当前选中瓶子的索引

    @classmethod
    def from_contents(cls, stacks: Sequence[Sequence[int]]) -> "PotionsGameModel":
        """用给定的液体布局构建一局（自底向上），不做随机生成。"""
        if not stacks:
            raise ValueError("need at least one potion")
        model = cls.__new__(cls)
        model.rng = random.Random()
        model.potions = [Potion(contents=s) for s in stacks]
        model.selected = None
        return model

    def _index_of(self, potion: Potion) -> int:
        for i, p in enumerate(self.potions):
            if p is potion:
                return i
        raise ValueError("potion does not belong to this game")

    # ----------- 选中状态 ----------- #
    def set_selected(self, potion: Optional[Potion]) -> None:
        """切换选中：再次选中同一瓶则取消；否则改选新瓶（None 表示清空）。"""
        idx = None if potion is None else self._index_of(potion)
        if self.selected is not None:
            self.potions[self.selected].is_selected = False

        if self.selected == idx:
            self.selected = None
        else:
            self.selected = idx
            if idx is not None:
                self.potions[idx].is_selected = True

    def get_selected(self) -> Optional[Potion]:
        return None if self.selected is None else self.potions[self.selected]

    # ----------- 倒液规则 ----------- #
    def can_move(self, src: Potion, dst: Potion) -> Tuple[bool, int]:
        """判定从 src 倒向 dst 是否允许，并返回本次可倒入的层数。"""
        self._index_of(src)
        self._index_of(dst)
        if src is dst or src.is_empty():
            return False, 0
        if src.is_closed() or dst.is_closed():
            return False, 0
        space = dst.free_space()
        if space == 0:
            return False, 0
        if not dst.is_empty() and dst.top_color() != src.top_color():
            return False, 0
        return True, min(src.top_block_size(), space)

    def move_contents(self, src: Potion, dst: Potion) -> int:
        """把 src 顶部连续同色块尽量倒入 dst，返回移动的层数。

        非法操作静默忽略（返回 0，不改变任何状态）。
        """
        ok, _ = self.can_move(src, dst)
        if not ok:
            return 0
        top = src.top_color()
        moved = 0
        while src.contents and len(dst.contents) < CAPACITY and src.contents[-1] == top:
            dst.contents.append(src.contents.pop())
            moved += 1
        return moved


# ===================== 交互逻辑（点击） ===================== #
def click_potion(model: PotionsGameModel, index: int) -> int:
    """处理一次对第 index 个瓶子的点击，返回本次倒入的层数。

    已封瓶的瓶子不响应点击；无选中时选中该瓶；
    已有选中时尝试倒入（点同一瓶则只是取消），随后清空选中。
    """
    if not 0 <= index < len(model.potions):
        raise IndexError(f"no potion at index {index}")
    clicked = model.potions[index]
    if clicked.is_closed():
        return 0

    active = model.get_selected()
    if active is None:
        model.set_selected(clicked)
        return 0

    moved = 0
    if active is not clicked:
        moved = model.move_contents(active, clicked)
    model.set_selected(None)
    return moved


def all_done(potions: Iterable[Potion]) -> bool:
    # 通关：所有瓶子为空或已封瓶
    return all(p.is_empty() or p.is_closed() for p in potions)
