"""Service layer — installation guard, collector, accounts, migrations, setup.

Every public operation returns a :class:`~talkctl.services.result.ServiceResult`.
"""
