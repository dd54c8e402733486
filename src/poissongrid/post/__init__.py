from poissongrid.post.results import (
    format_matrix,
    load_hdf5,
    plot_potential,
    reshape_solution,
    save_hdf5,
    write_matrix,
)

__all__ = [
    "format_matrix",
    "load_hdf5",
    "plot_potential",
    "reshape_solution",
    "save_hdf5",
    "write_matrix",
]
