from hypothesis import settings

# The first call of every kernel includes JIT compilation.
settings.register_profile("xselect", deadline=None, max_examples=200)
settings.load_profile("xselect")
