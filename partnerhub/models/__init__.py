from .commission import Commission
from .commission_settings import CommissionSettings
from .agent import Agent, SubAgent, AgentCommission
from .review import Review
from .bureau import Bureau, Worker

__all__ = [
    'Commission',
    'CommissionSettings',
    'Agent',
    'SubAgent',
    'AgentCommission',
    'Review',
    'Bureau',
    'Worker'
]
