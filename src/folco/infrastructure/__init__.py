"""Infrastructure layer: the SVG composite renderer and the icon installer.

Both are blocking implementations of the contracts in
:mod:`folco.services.contracts`; the folder service runs them on worker
threads.
"""
