"""Version control backends."""

from vendortrace.adapters.vcs.git_working_tree import GitWorkingTree
from vendortrace.adapters.vcs.hg_working_tree import HgWorkingTree

__all__ = ["GitWorkingTree", "HgWorkingTree"]
