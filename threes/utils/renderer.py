"""
Renderer for Threes! boards.
"""
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from threes.game.board import Board
from threes.utils.constants import BOARD_SIZE, tile_value


class ASCIIRenderer:
    """
    Renders the board as a grid of face values with the next-tile hint.
    """

    @staticmethod
    def render(board: 'Board'):
        """
        Render the board with ASCII art.

        Args:
            board: The Board to render
        """
        print(ASCIIRenderer.format(board))

    @staticmethod
    def format(board: 'Board') -> str:
        h_line = "+------" * BOARD_SIZE + "+"
        lines = [h_line]
        for y in range(BOARD_SIZE):
            row = "|"
            for x in range(BOARD_SIZE):
                rank = board[y * BOARD_SIZE + x]
                row += f"{tile_value(rank) if rank else '':>5} |"
            lines.append(row)
            lines.append(h_line)
        hint = tile_value(board.hint) if board.hint else "-"
        lines.append(f"Next: {hint}  Score: {board.score()}")
        return "\n".join(lines)
