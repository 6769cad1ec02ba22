from rdns_filter.cli import main

main()
