from quizboard.app import main

main()
