from importlib import import_module

modules = [
    'auth',
    'ideas',
    'nfts',
    'dao',
    'payments',
    'ai',
    'ipfs',
]

for m in modules:
    import_module(f'.{m}', __name__)

__all__ = modules
