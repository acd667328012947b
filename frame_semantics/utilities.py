"""utilities.py - Assorted Helper Functions"""
import typing as typ

__all__ = ['ordered_unique', 'duplicates']

def ordered_unique(col: typ.Collection) -> tuple:
    """Returns order preserved unique set"""
    seen = set()
    return tuple(ele for ele in col if not (ele in seen or seen.add(ele)))

def duplicates(col: typ.Collection) -> tuple: 
    """Returns order preserved set of elements occurring more than once"""
    seen = set()
    return ordered_unique(ele for ele in col if (ele in seen or seen.add(ele)))
