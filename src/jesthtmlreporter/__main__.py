from jesthtmlreporter.cli import main

main()
