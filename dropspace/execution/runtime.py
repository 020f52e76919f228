from dropspace import config
from dropspace.stdlib.time import BlockInfo
from dropspace.execution.response import Coin


class Context:
    """
    What the host tells a handler about the message it is executing: who sent
    it, which contract is running, the current block, and the funds attached.
    Block height and time are read from here at every check, never cached.
    """
    def __init__(self, base_state):
        self._base_state = base_state

    def _get_state(self):
        return self._base_state

    @property
    def this(self):
        return self._get_state()['this']

    @property
    def caller(self):
        return self._get_state()['caller']

    @property
    def signer(self):
        return self._get_state()['signer']

    @property
    def block(self) -> BlockInfo:
        return self._get_state()['block']

    @property
    def funds(self):
        return self._get_state()['funds']

    def sent_funds(self, denom=config.DENOM):
        return sum(c.amount for c in self.funds if c.denom == denom)


class Runtime:
    def __init__(self, this=config.CONTRACT_NAME):
        self.this = this
        self.env = {}
        self.context = None

    def set_up(self, sender, environment=None, funds=None):
        env = dict(self.env)
        env.update(environment or {})

        block = env.get('block')
        block = BlockInfo() if block is None else BlockInfo.from_dict(block)

        self.context = Context({
            'this': self.this,
            'caller': sender,
            'signer': sender,
            'block': block,
            'funds': [Coin.parse(c) for c in (funds or [])],
        })

        return self.context

    def clean_up(self):
        self.context = None
