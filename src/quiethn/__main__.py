from quiethn.cli import main

main()
