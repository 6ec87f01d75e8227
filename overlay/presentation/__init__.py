from .viewmodels import SearchBoxViewModel, FocusViewModel, build_search_box, build_focus

__all__ = ['SearchBoxViewModel', 'FocusViewModel', 'build_search_box', 'build_focus']
