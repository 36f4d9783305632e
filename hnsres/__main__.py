from hnsres.cli.main import main

main()
