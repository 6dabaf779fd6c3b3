from eligex.config.eligex_config import EligEXConfig

__all__ = ['EligEXConfig']
