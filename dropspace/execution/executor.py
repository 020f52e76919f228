from copy import deepcopy
import traceback

from dropspace import config
from dropspace.db.driver import ContractDriver
from dropspace.exceptions import UnknownMessage
from dropspace.execution.runtime import Runtime
from dropspace.stdlib.access import exported
from dropspace.contract.nft import NftContract
from dropspace.logger import get_logger

log = get_logger('Executor')


def parse_msg(msg):
    """Splits a tagged variant such as {'transfer_nft': {...}} into (name, kwargs)."""
    if not isinstance(msg, dict) or len(msg) != 1:
        raise UnknownMessage(name=msg)

    name, kwargs = next(iter(msg.items()))
    return name, dict(kwargs or {})


class Executor:
    def __init__(self, driver=None, contract=None, contract_name=config.CONTRACT_NAME):
        self.driver = driver

        if self.driver is None:
            self.driver = ContractDriver()

        self.contract = contract

        if self.contract is None:
            self.contract = NftContract(driver=self.driver, name=contract_name)

        self.runtime = Runtime(this=contract_name)

    def _run(self, kind, sender, function_name, kwargs, funds, environment):
        func = exported(self.contract, function_name, kind)
        if func is None:
            raise UnknownMessage(name=function_name)

        ctx = self.runtime.set_up(sender=sender, environment=environment, funds=funds)
        return func(ctx, **(kwargs or {}))

    def instantiate(self, sender, kwargs, funds=None, environment=None, auto_commit=False) -> dict:
        return self._execute(sender, self.contract.instantiate, kwargs, funds, environment, auto_commit,
                             name='instantiate')

    def execute(self, sender, function_name, kwargs, funds=None, environment=None, auto_commit=False) -> dict:
        func = exported(self.contract, function_name, config.EXECUTE_EXPORT)
        return self._execute(sender, func, kwargs, funds, environment, auto_commit, name=function_name)

    def _execute(self, sender, func, kwargs, funds, environment, auto_commit, name) -> dict:
        try:
            if func is None:
                raise UnknownMessage(name=name)

            ctx = self.runtime.set_up(sender=sender, environment=environment, funds=funds)
            result = func(ctx, **(kwargs or {}))
            status_code = 0
        except Exception as e:
            result = e
            status_code = 1
            log.error('{} from {} failed: {}'.format(name, sender, e))
            log.debug(traceback.format_exc())

        # A failed message leaves nothing behind
        if status_code == 1:
            self.driver.clear_pending_state()

        writes = deepcopy(self.driver.pending_writes)

        if status_code == 0:
            self.driver.soft_apply()
            if auto_commit:
                self.driver.commit()

        self.runtime.clean_up()

        output = {
            'status_code': status_code,
            'result': result,
            'writes': writes,
        }

        return output

    def query(self, function_name, kwargs=None, environment=None) -> dict:
        try:
            result = self._run(config.QUERY_EXPORT, None, function_name, kwargs, None, environment)
            status_code = 0
        except Exception as e:
            result = e
            status_code = 1
            log.debug('query {} failed: {}'.format(function_name, e))

        # Queries are read only
        self.driver.clear_pending_state()
        self.runtime.clean_up()

        return {
            'status_code': status_code,
            'result': result,
        }

    def execute_msg(self, sender, msg, funds=None, environment=None, auto_commit=False) -> dict:
        try:
            name, kwargs = parse_msg(msg)
        except UnknownMessage as e:
            return {'status_code': 1, 'result': e, 'writes': {}}

        return self.execute(sender, name, kwargs, funds=funds, environment=environment, auto_commit=auto_commit)

    def query_msg(self, msg, environment=None) -> dict:
        try:
            name, kwargs = parse_msg(msg)
        except UnknownMessage as e:
            return {'status_code': 1, 'result': e}

        return self.query(name, kwargs, environment=environment)
