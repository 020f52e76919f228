from functools import partial

from dropspace import config
from dropspace.db.driver import ContractDriver, InMemDriver
from dropspace.execution.executor import Executor
from dropspace.stdlib.access import exports
from dropspace.stdlib.time import BlockInfo


class AbstractContract:
    def __init__(self, name, signer, environment, executor: Executor):
        self.name = name
        self.signer = signer
        self.environment = environment
        self.executor = executor

        # set up virtual functions
        for func in exports(self.executor.contract, config.EXECUTE_EXPORT):
            setattr(self, func, partial(self._abstract_function_call, func=func))

    def keys(self):
        return self.executor.driver.get_contract_keys(self.name)

    def quick_read(self, variable, key=None, args=None):
        a = []

        if key is not None:
            a.append(key)

        if args is not None and isinstance(args, list):
            for arg in args:
                a.append(arg)

        k = self.executor.driver.make_key(contract=self.name, variable=variable, args=a)
        return self.executor.driver.get(k)

    def _abstract_function_call(self, func, signer=None, funds=None, environment=None, auto_commit=True, **kwargs):
        signer = signer or self.signer
        environment = environment or self.environment

        output = self.executor.execute(sender=signer,
                                       function_name=func,
                                       kwargs=kwargs,
                                       funds=funds,
                                       environment=environment,
                                       auto_commit=auto_commit)

        if output['status_code'] == 1:
            raise output['result']

        return output['result']

    def query(self, func, environment=None, **kwargs):
        output = self.executor.query(func, kwargs, environment=environment or self.environment)

        if output['status_code'] == 1:
            raise output['result']

        return output['result']


class DropspaceClient:
    def __init__(self, signer='sys', driver=None, contract_name=config.CONTRACT_NAME, environment=None):
        self.raw_driver = driver if driver is not None else ContractDriver(driver=InMemDriver())
        self.executor = Executor(driver=self.raw_driver, contract_name=contract_name)
        self.signer = signer
        self.contract_name = contract_name
        self.environment = environment if environment is not None else {'block': BlockInfo()}

        self.contract = AbstractContract(name=contract_name,
                                         signer=self.signer,
                                         environment=self.environment,
                                         executor=self.executor)

    def instantiate(self, signer=None, auto_commit=True, **kwargs):
        output = self.executor.instantiate(sender=signer or self.signer,
                                           kwargs=kwargs,
                                           environment=self.environment,
                                           auto_commit=auto_commit)

        if output['status_code'] == 1:
            raise output['result']

        return output['result']

    def set_block(self, height=None, time=None):
        block = self.environment['block']
        self.environment['block'] = BlockInfo(
            height=block.height if height is None else height,
            time=block.time if time is None else time,
            chain_id=block.chain_id
        )
        return self.environment['block']

    def next_block(self, blocks=1, seconds=5):
        block = self.environment['block']
        return self.set_block(height=block.height + blocks, time=block.time + blocks * seconds)

    def flush(self):
        self.raw_driver.flush()

    def get_var(self, variable, arguments=[]):
        return self.raw_driver.get_var(self.contract_name, variable, arguments)

    def keys(self):
        return self.raw_driver.get_contract_keys(self.contract_name)
