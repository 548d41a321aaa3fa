import logging

from escape import events
from escape.director import Director
from escape.events import Status
from escape.narrator import Narrator

logger = logging.getLogger(__name__)


class Session:
    def __init__(self, world, narrator=None, listener=None, read_line=None):
        """
        One play-through of one World.
        The session owns the status; the Director is the only thing that changes it
        mid-turn, and the session itself flips it to WON after a turn.
        """
        self.world = world
        self.narrator = narrator
        self.listener = listener
        self.read_line = read_line or input
        self.status = Status.PLAYING
        self.director = Director(world, self)
        self.turns = 0

    @property
    def is_over(self):
        return self.status is not Status.PLAYING

    def step(self, line):
        """Apply one line of input and return the events it produced."""
        self.turns += 1
        results = self.director.interpret(line)

        if self.listener is not None and self._is_unknown(results):
            results = self._translate(line, results)

        self._check_terminal()
        return results

    def _is_unknown(self, results):
        return len(results) == 1 and events.is_error(results[0], events.UNKNOWN_COMMAND)

    def _translate(self, line, results):
        mapped = self.listener.translate(line, self.director.valid_commands(), self.director.context())
        if not mapped or mapped.strip().lower() == line.strip().lower():
            return results
        logger.info("Listener mapped %r to %r", line, mapped)
        return [events.interpreted(line, mapped)] + self.director.interpret(mapped)

    def _check_terminal(self):
        if self.status is Status.PLAYING and self.world.has_won():
            logger.info("%s reached %s", self.world.player.name, self.world.win_room_id)
            self.status = Status.WON

    # ============================================
    # GAME LOOP
    # ============================================
    def run(self):
        narrator = self.narrator or Narrator()
        narrator.welcome()

        while self.status is Status.PLAYING:
            narrator.render(self.director.cmd_look(""))
            try:
                line = self.read_line()
            except EOFError:
                # End of input means the player walked away.
                line = "quit"
            narrator.render(self.step(line))

            if self.status is Status.WON:
                narrator.victory()

        if self.status is Status.LOST:
            narrator.game_over()
        narrator.farewell()
        logger.info("Session ended: %s after %d turns", self.status.value, self.turns)
        return self.status
