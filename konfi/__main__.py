""" Lets `python -m konfi settings.konfi` work the same as the console script. """
from konfi.cmdline import main

main()
